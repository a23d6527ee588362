"""Marketplace pages: landing, discovery, photographer profile and dashboard."""

from __future__ import annotations

import logging
from datetime import date
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError

from snap_market.api.forms import (
    BookingForm,
    PhotographerProfileForm,
    form_error_message,
)
from snap_market.api.web import (
    error_notice,
    get_container,
    notices_from_query,
    optional_session,
    redirect,
    require_session,
    templates,
)
from snap_market.containers import AppContainer  # noqa: TC001
from snap_market.domain.bookings import TERMINAL_STATUSES
from snap_market.domain.errors import (
    FetchFailureError,
    InvalidTransitionError,
    NotAuthorizedError,
    WriteFailureError,
)
from snap_market.domain.models import AuthSession  # noqa: TC001
from snap_market.domain.notices import Notice
from snap_market.services.listing import filter_photographers
from snap_market.services.pipeline import LoadPipeline, PageContext, Step
from snap_market.services.viewers import PhotographerViewer, build_viewer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

TAB_BOOKINGS = "bookings"
TAB_PROFILE = "profile"


@router.get("/", response_class=HTMLResponse)
async def landing(
    request: Request,
    notice: str | None = None,
    session: AuthSession | None = Depends(optional_session),
) -> Response:
    """Render the public landing page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"session": session, "notices": notices_from_query(notice)},
    )


@router.get("/discover", response_class=HTMLResponse)
async def discover(
    request: Request,
    q: str = "",
    notice: str | None = None,
    session: AuthSession = Depends(require_session),
) -> Response:
    """List available photographers, filtered by the search query."""
    container = get_container(request)
    context = (
        LoadPipeline()
        .then("photographers", _load_photographers(container))
        .run(PageContext(session=session, notices=notices_from_query(notice)))
    )
    photographers = context.data.get("photographers", [])
    return templates.TemplateResponse(
        request,
        "discover.html",
        {
            "session": session,
            "notices": context.notices,
            "query": q,
            "photographers": filter_photographers(photographers, q),
        },
    )


@router.get("/photographer/{user_id}", response_class=HTMLResponse)
async def photographer_profile(
    user_id: UUID,
    request: Request,
    notice: str | None = None,
    session: AuthSession = Depends(require_session),
) -> Response:
    """Show a photographer's public profile with the booking form."""
    container = get_container(request)
    return _render_photographer(
        request,
        container,
        PageContext(session=session, notices=notices_from_query(notice)),
        user_id,
    )


@router.post("/photographer/{user_id}/bookings")
async def create_booking(  # noqa: PLR0913
    user_id: UUID,
    request: Request,
    service_type: str = Form(""),
    preferred_date: str = Form(""),
    message: str = Form(""),
    session: AuthSession = Depends(require_session),
) -> Response:
    """Send a booking request to the photographer."""
    container = get_container(request)
    submitted = {
        "service_type": service_type,
        "preferred_date": preferred_date,
        "message": message,
    }
    try:
        form = BookingForm(**submitted)
    except ValidationError as exc:
        context = PageContext(
            session=session, notices=[Notice.error(form_error_message(exc))]
        )
        return _render_photographer(
            request, container, context, user_id, submitted, status.HTTP_400_BAD_REQUEST
        )

    context = (
        LoadPipeline()
        .then("viewer", _load_viewer(container))
        .run(PageContext(session=session))
    )
    if context.viewer is None:
        return _render_photographer(
            request, container, context, user_id, submitted, status.HTTP_400_BAD_REQUEST
        )
    try:
        context.viewer.request_booking(
            photographer_id=user_id,
            service_type=form.service_type,
            preferred_date=form.preferred_date,
            message=form.message,
        )
    except WriteFailureError as exc:
        failed = PageContext(
            session=session,
            notices=[
                error_notice(container, exc, "Failed to send booking request.")
            ],
        )
        return _render_photographer(
            request, container, failed, user_id, submitted, status.HTTP_400_BAD_REQUEST
        )
    return redirect("/dashboard", notice="booking_sent")


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    tab: str = TAB_BOOKINGS,
    notice: str | None = None,
    session: AuthSession = Depends(require_session),
) -> Response:
    """Show the signed-in user's bookings and, for photographers, profile setup."""
    container = get_container(request)
    context = _load_dashboard(container, session, notices_from_query(notice))
    return _render_dashboard(request, context, tab)


@router.post("/dashboard/profile")
async def save_photographer_profile(  # noqa: PLR0913
    request: Request,
    bio: str = Form(""),
    location: str = Form(""),
    city: str = Form(""),
    specialty: str = Form(""),
    hourly_rate: str = Form(""),
    years_experience: str = Form(""),
    session: AuthSession = Depends(require_session),
) -> Response:
    """Create or update the photographer's marketplace profile."""
    container = get_container(request)
    form = PhotographerProfileForm(
        bio=bio,
        location=location,
        city=city,
        specialty=specialty,
        hourly_rate=hourly_rate,
        years_experience=years_experience,
    )
    context = (
        LoadPipeline()
        .then("viewer", _load_viewer(container))
        .run(PageContext(session=session))
    )
    viewer = context.viewer
    if viewer is None:
        return _render_failure(
            request, container, session, context.notices, TAB_PROFILE, form
        )
    if not isinstance(viewer, PhotographerViewer):
        return _render_failure(
            request,
            container,
            session,
            [Notice.error("Only photographers can set up a profile.")],
            TAB_BOOKINGS,
            status_code=status.HTTP_403_FORBIDDEN,
        )
    missing = form.missing_required()
    if missing:
        return _render_failure(
            request,
            container,
            session,
            [Notice.error(f"{missing} is required.")],
            TAB_PROFILE,
            form,
        )
    try:
        viewer.save_photographer_profile(form.to_fields())
    except (WriteFailureError, FetchFailureError, NotAuthorizedError) as exc:
        return _render_failure(
            request,
            container,
            session,
            [error_notice(container, exc, "Failed to update profile.")],
            TAB_PROFILE,
            form,
            _status_for(exc),
        )
    return redirect(f"/dashboard?tab={TAB_PROFILE}", notice="profile_saved")


@router.post("/dashboard/bookings/{booking_id}/status")
async def update_booking_status(
    booking_id: UUID,
    request: Request,
    new_status: str = Form("", alias="status"),
    session: AuthSession = Depends(require_session),
) -> Response:
    """Accept or decline a pending booking."""
    if new_status not in TERMINAL_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Status must be accepted or declined.",
        )
    container = get_container(request)
    context = (
        LoadPipeline()
        .then("viewer", _load_viewer(container))
        .run(PageContext(session=session))
    )
    viewer = context.viewer
    if viewer is None:
        return _render_failure(
            request, container, session, context.notices, TAB_BOOKINGS
        )
    if not isinstance(viewer, PhotographerViewer):
        return _render_failure(
            request,
            container,
            session,
            [Notice.error("Only photographers can update booking status.")],
            TAB_BOOKINGS,
            status_code=status.HTTP_403_FORBIDDEN,
        )
    try:
        viewer.update_booking_status(booking_id, new_status)
    except (
        WriteFailureError,
        FetchFailureError,
        NotAuthorizedError,
        InvalidTransitionError,
    ) as exc:
        return _render_failure(
            request,
            container,
            session,
            [error_notice(container, exc, "Failed to update booking status.")],
            TAB_BOOKINGS,
            status_code=_status_for(exc),
        )
    return redirect("/dashboard", notice="status_updated")


def _load_viewer(container: AppContainer) -> Step:
    def step(context: PageContext) -> None:
        profile = container.profile_service.fetch_profile(context.session.user_id)
        context.viewer = build_viewer(
            context.session,
            profile,
            booking_service=container.booking_service,
            profile_service=container.profile_service,
        )

    return step


def _load_photographer_profile(context: PageContext) -> None:
    if isinstance(context.viewer, PhotographerViewer):
        context.data["photographer_profile"] = (
            context.viewer.load_photographer_profile()
        )


def _load_bookings(context: PageContext) -> None:
    context.data["bookings"] = context.viewer.list_bookings()


def _load_photographers(container: AppContainer) -> Step:
    def step(context: PageContext) -> None:
        context.data["photographers"] = (
            container.listing_service.list_available_photographers()
        )

    return step


def _load_photographer(container: AppContainer, user_id: UUID) -> Step:
    def step(context: PageContext) -> None:
        context.data["photographer"] = container.listing_service.get_photographer(
            user_id
        )

    return step


def _load_dashboard(
    container: AppContainer, session: AuthSession, notices: list[Notice]
) -> PageContext:
    return (
        LoadPipeline()
        .then("viewer", _load_viewer(container))
        .then("photographer_profile", _load_photographer_profile)
        .then("bookings", _load_bookings)
        .run(PageContext(session=session, notices=notices))
    )


def _render_dashboard(
    request: Request,
    context: PageContext,
    tab: str,
    profile_form: PhotographerProfileForm | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    viewer = context.viewer
    can_manage = isinstance(viewer, PhotographerViewer)
    if profile_form is None:
        profile_form = PhotographerProfileForm.from_profile(
            context.data.get("photographer_profile")
        )
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "session": context.session,
            "notices": context.notices,
            "viewer": viewer,
            "can_manage": can_manage,
            "tab": tab if can_manage and tab == TAB_PROFILE else TAB_BOOKINGS,
            "bookings": context.data.get("bookings", []),
            "profile_form": profile_form,
        },
        status_code=status_code,
    )


def _render_failure(  # noqa: PLR0913
    request: Request,
    container: AppContainer,
    session: AuthSession,
    notices: list[Notice],
    tab: str,
    profile_form: PhotographerProfileForm | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    """Re-render the dashboard from committed state with the failure notices."""
    context = _load_dashboard(container, session, list(notices))
    return _render_dashboard(request, context, tab, profile_form, status_code)


def _render_photographer(  # noqa: PLR0913
    request: Request,
    container: AppContainer,
    context: PageContext,
    user_id: UUID,
    booking_form: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    context = LoadPipeline().then(
        "photographer", _load_photographer(container, user_id)
    ).run(context)
    return templates.TemplateResponse(
        request,
        "photographer.html",
        {
            "session": context.session,
            "notices": context.notices,
            "photographer": context.data.get("photographer"),
            "booking_form": booking_form
            or {"service_type": "", "preferred_date": "", "message": ""},
            "min_date": date.today().isoformat(),
        },
        status_code=status_code,
    )


def _status_for(exc: Exception) -> int:
    if isinstance(exc, NotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidTransitionError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST
