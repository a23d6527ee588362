"""Supabase-backed booking repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from snap_market.domain.bookings import Booking
from snap_market.services.bookings import BookingRepository

_BOOKING_COLUMNS = (
    "id, client_id, photographer_id, service_type, preferred_date, message, "
    "status, created_at"
)
_BOOKING_WITH_PARTIES = (
    f"{_BOOKING_COLUMNS}, "
    "client:profiles!bookings_client_id_fkey(full_name), "
    "photographer:profiles!bookings_photographer_id_fkey(full_name)"
)


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for booking persistence."""

    client: Client

    def create_booking(  # noqa: PLR0913
        self,
        client_id: UUID,
        photographer_id: UUID,
        service_type: str,
        preferred_date: date,
        message: str,
        status: str,
    ) -> Booking:
        """Insert a booking row and return it."""
        response = (
            self.client.table("bookings")
            .insert(
                {
                    "client_id": str(client_id),
                    "photographer_id": str(photographer_id),
                    "service_type": service_type,
                    "preferred_date": preferred_date.isoformat(),
                    "message": message,
                    "status": status,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create booking")
        return _parse_booking(response.data[0])

    def get_booking(self, booking_id: UUID) -> Booking | None:
        """Return a booking by id, if present."""
        response = (
            self.client.table("bookings")
            .select(_BOOKING_WITH_PARTIES)
            .eq("id", str(booking_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def list_for_user(self, user_id: UUID) -> list[Booking]:
        """Return bookings where the user is either party, newest first."""
        response = (
            self.client.table("bookings")
            .select(_BOOKING_WITH_PARTIES)
            .or_(f"client_id.eq.{user_id},photographer_id.eq.{user_id}")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_booking(row) for row in response.data or []]

    def transition_status(
        self, booking_id: UUID, from_status: str, to_status: str
    ) -> Booking | None:
        """Set the status only while the row still has from_status."""
        response = (
            self.client.table("bookings")
            .update({"status": to_status})
            .eq("id", str(booking_id))
            .eq("status", from_status)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])


def _parse_booking(row: dict[str, object]) -> Booking:
    return Booking(
        id=UUID(str(row["id"])),
        client_id=UUID(str(row["client_id"])),
        photographer_id=UUID(str(row["photographer_id"])),
        service_type=str(row.get("service_type") or ""),
        preferred_date=date.fromisoformat(str(row["preferred_date"])[:10]),
        message=str(row.get("message") or ""),
        status=str(row["status"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        client_name=_party_name(row.get("client")),
        photographer_name=_party_name(row.get("photographer")),
    )


def _party_name(value: object) -> str | None:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        return value.get("full_name")
    return None
