"""FastAPI application factory."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse, Response

from snap_market.api.auth import router as auth_router
from snap_market.api.pages import router as pages_router
from snap_market.api.web import reissue_session_cookies
from snap_market.app_logging import configure_logging
from snap_market.containers import AppContainer
from snap_market.domain.errors import AuthRequiredError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(pages_router)

    @app.middleware("http")
    async def keep_session_fresh(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Write rotated session tokens back to the browser."""
        response = await call_next(request)
        reissue_session_cookies(request, response)
        return response

    @app.exception_handler(AuthRequiredError)
    async def redirect_to_sign_in(
        request: Request, exc: AuthRequiredError
    ) -> RedirectResponse:
        """Send visitors without a session to the sign-in page."""
        logger.info("Redirecting to sign in", extra={"path": request.url.path})
        return RedirectResponse(
            url=request.app.state.container.settings.sign_in_path, status_code=303
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
