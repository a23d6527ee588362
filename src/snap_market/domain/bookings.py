"""Domain models for booking requests."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_DECLINED = "declined"
TERMINAL_STATUSES = frozenset({STATUS_ACCEPTED, STATUS_DECLINED})


@dataclass(frozen=True)
class Booking:
    """A client's service request directed at a photographer."""

    id: UUID
    client_id: UUID
    photographer_id: UUID
    service_type: str
    preferred_date: date
    message: str
    status: str
    created_at: datetime
    client_name: str | None = None
    photographer_name: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def involves(self, user_id: UUID) -> bool:
        """Return True when the user is either party of the booking."""
        return user_id in {self.client_id, self.photographer_id}
