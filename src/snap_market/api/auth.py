"""Sign-in, sign-up and sign-out routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError

from snap_market.api.forms import SignInForm, SignUpForm, form_error_message
from snap_market.api.web import (
    clear_session_cookies,
    error_notice,
    get_container,
    notices_from_query,
    optional_session,
    redirect,
    set_session_cookies,
    templates,
)
from snap_market.domain.errors import WriteFailureError
from snap_market.domain.models import AuthSession  # noqa: TC001
from snap_market.domain.notices import Notice

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/auth", response_class=HTMLResponse)
async def auth_page(
    request: Request,
    notice: str | None = None,
    session: AuthSession | None = Depends(optional_session),
) -> Response:
    """Render the sign-in and sign-up forms."""
    if session is not None:
        return redirect("/discover")
    return _render(request, notices_from_query(notice))


@router.post("/auth/sign-in")
async def sign_in(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
) -> Response:
    """Sign in and store the session cookies."""
    container = get_container(request)
    try:
        form = SignInForm(email=email, password=password)
    except ValidationError as exc:
        return _render(request, [Notice.error(form_error_message(exc))], 400)
    try:
        session = container.session_guard.sign_in(form.email, form.password)
    except WriteFailureError as exc:
        return _render(
            request,
            [error_notice(container, exc, "Failed to sign in.")],
            400,
            email=form.email,
        )
    response = redirect("/discover", notice="signed_in")
    set_session_cookies(response, container, session)
    return response


@router.post("/auth/sign-up")
async def sign_up(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    role: str = Form("client"),
) -> Response:
    """Create an account, signing in directly when no confirmation is needed."""
    container = get_container(request)
    try:
        form = SignUpForm(
            full_name=full_name, email=email, password=password, role=role
        )
    except ValidationError as exc:
        return _render(
            request,
            [Notice.error(form_error_message(exc))],
            400,
            email=email,
            full_name=full_name,
            mode="sign-up",
        )
    try:
        session = container.session_guard.sign_up(
            form.email, form.password, form.full_name, form.role
        )
    except WriteFailureError as exc:
        return _render(
            request,
            [error_notice(container, exc, "Failed to create account.")],
            400,
            email=form.email,
            full_name=form.full_name,
            mode="sign-up",
        )
    if session is None:
        return redirect("/auth", notice="check_email")
    logger.info("Account created", extra={"user_id": str(session.user_id)})
    response = redirect("/dashboard", notice="signed_in")
    set_session_cookies(response, container, session)
    return response


@router.post("/auth/sign-out")
async def sign_out(
    request: Request, session: AuthSession | None = Depends(optional_session)
) -> Response:
    """Revoke the session and clear the cookies."""
    container = get_container(request)
    if session is not None:
        container.session_guard.sign_out(session)
    response = redirect("/", notice="signed_out")
    clear_session_cookies(response)
    return response


def _render(
    request: Request,
    notices: list[Notice],
    status_code: int = 200,
    *,
    email: str = "",
    full_name: str = "",
    mode: str = "sign-in",
) -> Response:
    return templates.TemplateResponse(
        request,
        "auth.html",
        {
            "notices": notices,
            "email": email,
            "full_name": full_name,
            "mode": mode,
        },
        status_code=status_code,
    )
