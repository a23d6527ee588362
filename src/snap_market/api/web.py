"""Shared helpers for the HTML routes: templates, cookies and notices."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Cookie, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from snap_market.domain.models import AuthSession  # noqa: TC001
from snap_market.domain.notices import Notice

if TYPE_CHECKING:
    from starlette.responses import Response

    from snap_market.containers import AppContainer

ACCESS_COOKIE = "sm-access-token"
REFRESH_COOKIE = "sm-refresh-token"

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

NOTICES: dict[str, Notice] = {
    "booking_sent": Notice.success(
        "The photographer will review your request soon.",
        title="Booking request sent!",
    ),
    "profile_saved": Notice.success("Your photographer profile has been updated."),
    "status_updated": Notice.success("Booking status updated."),
    "signed_in": Notice.success("You are signed in.", title="Welcome back!"),
    "signed_out": Notice.success("You have been signed out.", title="Signed out"),
    "check_email": Notice.success(
        "Check your email to confirm your account, then sign in.",
        title="Account created",
    ),
}


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_session(
    request: Request,
    access_token: str | None = Cookie(default=None, alias=ACCESS_COOKIE),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
) -> AuthSession:
    """Resolve the session from cookies; raises AuthRequiredError without one."""
    container = get_container(request)
    session = container.session_guard.require_session(access_token, refresh_token)
    _remember_rotation(request, session, access_token)
    return session


async def optional_session(
    request: Request,
    access_token: str | None = Cookie(default=None, alias=ACCESS_COOKIE),
    refresh_token: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
) -> AuthSession | None:
    """Resolve the session from cookies, if any."""
    container = get_container(request)
    session = container.session_guard.get_current_session(access_token, refresh_token)
    _remember_rotation(request, session, access_token)
    return session


def refreshed_session(request: Request) -> AuthSession | None:
    """Return the session whose tokens were rotated during this request."""
    return getattr(request.state, "refreshed_session", None)


def _remember_rotation(
    request: Request, session: AuthSession | None, access_token: str | None
) -> None:
    if session is not None and session.access_token != access_token:
        request.state.refreshed_session = session


def notices_from_query(key: str | None) -> list[Notice]:
    """Return the notice carried across a redirect, if the key is known."""
    notice = NOTICES.get(key or "")
    return [notice] if notice else []


def redirect(url: str, notice: str | None = None) -> RedirectResponse:
    """Return a 303 redirect, optionally carrying a notice key."""
    if notice:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}notice={notice}"
    return RedirectResponse(url=url, status_code=303)


def error_notice(container: AppContainer, exc: Exception, fallback: str) -> Notice:
    """Return an error notice with local debug info about the root cause."""
    description = str(exc).strip() or fallback
    if container.settings.environment == "local" and exc.__cause__ is not None:
        cause = exc.__cause__
        detail = f"{type(cause).__name__}: {cause}".strip()
        if detail:
            description = f"{description} (debug: {detail})"
    return Notice.error(description)


def set_session_cookies(
    response: Response, container: AppContainer, session: AuthSession
) -> None:
    """Store the session tokens in HTTP-only cookies."""
    secure = container.settings.secure_cookies
    response.set_cookie(
        ACCESS_COOKIE,
        session.access_token,
        httponly=True,
        samesite="lax",
        secure=secure,
    )
    if session.refresh_token:
        response.set_cookie(
            REFRESH_COOKIE,
            session.refresh_token,
            httponly=True,
            samesite="lax",
            secure=secure,
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)


def reissue_session_cookies(request: Request, response: Response) -> None:
    """Store rotated tokens unless the route already wrote the session cookies."""
    session = refreshed_session(request)
    if session is None:
        return
    written = response.headers.getlist("set-cookie")
    if any(header.startswith(f"{ACCESS_COOKIE}=") for header in written):
        return
    set_session_cookies(response, get_container(request), session)
