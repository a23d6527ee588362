"""Role capabilities of the signed-in user."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from snap_market.domain.bookings import Booking
from snap_market.domain.models import (
    ROLE_CLIENT,
    ROLE_PHOTOGRAPHER,
    AuthSession,
    Profile,
)
from snap_market.domain.photographers import (
    PhotographerProfile,
    PhotographerProfileFields,
)
from snap_market.services.bookings import BookingService
from snap_market.services.profiles import ProfileService


@dataclass(frozen=True)
class ClientViewer:
    """A signed-in user who requests bookings."""

    session: AuthSession
    profile: Profile
    booking_service: BookingService
    profile_service: ProfileService

    role = ROLE_CLIENT

    @property
    def user_id(self) -> UUID:
        return self.session.user_id

    def list_bookings(self) -> list[Booking]:
        """Return bookings visible to this viewer, newest first."""
        return self.booking_service.list_bookings_for_user(self.user_id)

    def request_booking(
        self,
        photographer_id: UUID,
        service_type: str,
        preferred_date: date,
        message: str,
    ) -> Booking:
        """Send a booking request to a photographer."""
        return self.booking_service.create_booking(
            client_id=self.user_id,
            photographer_id=photographer_id,
            service_type=service_type,
            preferred_date=preferred_date,
            message=message,
        )

    def counterpart_name(self, booking: Booking) -> str | None:
        """Return the display name of the other party."""
        if booking.client_id == self.user_id:
            return booking.photographer_name
        return booking.client_name


@dataclass(frozen=True)
class PhotographerViewer(ClientViewer):
    """A signed-in photographer who manages requests and a listing."""

    role = ROLE_PHOTOGRAPHER

    def update_booking_status(self, booking_id: UUID, new_status: str) -> Booking:
        """Accept or decline a pending booking addressed to this photographer."""
        return self.booking_service.update_booking_status(
            actor_id=self.user_id, booking_id=booking_id, new_status=new_status
        )

    def load_photographer_profile(self) -> PhotographerProfile | None:
        return self.profile_service.fetch_photographer_profile(self.user_id)

    def save_photographer_profile(self, fields: PhotographerProfileFields) -> None:
        """Create or update this photographer's listing."""
        self.profile_service.upsert_photographer_profile(
            actor_id=self.user_id, user_id=self.user_id, fields=fields
        )


Viewer = ClientViewer | PhotographerViewer


def build_viewer(
    session: AuthSession,
    profile: Profile,
    booking_service: BookingService,
    profile_service: ProfileService,
) -> Viewer:
    """Return the capability set matching the profile's role."""
    viewer_cls = PhotographerViewer if profile.is_photographer else ClientViewer
    return viewer_cls(
        session=session,
        profile=profile,
        booking_service=booking_service,
        profile_service=profile_service,
    )
