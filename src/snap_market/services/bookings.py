"""Booking workflow: requests and the pending/accepted/declined lifecycle."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from snap_market.domain.bookings import (
    STATUS_PENDING,
    TERMINAL_STATUSES,
    Booking,
)
from snap_market.domain.errors import (
    FetchFailureError,
    InvalidTransitionError,
    NotAuthorizedError,
    ValidationError,
    WriteFailureError,
    error_message,
)
from snap_market.services.profiles import ProfileService

logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

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

    def get_booking(self, booking_id: UUID) -> Booking | None:
        """Return a booking by id, if present."""

    def list_for_user(self, user_id: UUID) -> list[Booking]:
        """Return bookings where the user is client or photographer."""

    def transition_status(
        self, booking_id: UUID, from_status: str, to_status: str
    ) -> Booking | None:
        """Set the status when it still equals from_status; None if it did not."""


@dataclass
class BookingService:
    """Application service for booking requests."""

    repository: BookingRepository
    profile_service: ProfileService

    def create_booking(  # noqa: PLR0913
        self,
        client_id: UUID,
        photographer_id: UUID,
        service_type: str,
        preferred_date: date,
        message: str,
    ) -> Booking:
        """Create a pending booking request from a client to a photographer."""
        try:
            photographer_known = self.profile_service.profile_exists(photographer_id)
        except FetchFailureError as exc:
            raise WriteFailureError("Failed to send booking request.") from exc
        if not photographer_known:
            raise ValidationError("Failed to send booking request.")
        try:
            booking = self.repository.create_booking(
                client_id=client_id,
                photographer_id=photographer_id,
                service_type=service_type,
                preferred_date=preferred_date,
                message=message,
                status=STATUS_PENDING,
            )
        except Exception as exc:
            logger.exception(
                "Failed to create booking",
                extra={
                    "client_id": str(client_id),
                    "photographer_id": str(photographer_id),
                },
            )
            raise WriteFailureError(
                error_message(exc, "Failed to send booking request.")
            ) from exc
        logger.info(
            "Booking requested",
            extra={"booking_id": str(booking.id), "client_id": str(client_id)},
        )
        return booking

    def list_bookings_for_user(self, user_id: UUID) -> list[Booking]:
        """Return the user's bookings, newest first."""
        try:
            bookings = self.repository.list_for_user(user_id)
        except Exception as exc:
            logger.exception("Failed to load bookings", extra={"user_id": str(user_id)})
            raise FetchFailureError("Failed to load bookings.") from exc
        visible = [booking for booking in bookings if booking.involves(user_id)]
        return sorted(visible, key=lambda booking: booking.created_at, reverse=True)

    def update_booking_status(
        self, actor_id: UUID, booking_id: UUID, new_status: str
    ) -> Booking:
        """Move a pending booking to accepted or declined."""
        if new_status not in TERMINAL_STATUSES:
            raise ValueError(f"Unsupported booking status: {new_status}")
        try:
            booking = self.repository.get_booking(booking_id)
        except Exception as exc:
            logger.exception(
                "Failed to load booking", extra={"booking_id": str(booking_id)}
            )
            raise FetchFailureError("Failed to update booking status.") from exc
        if booking is None:
            raise FetchFailureError("Booking not found.")
        if booking.photographer_id != actor_id:
            raise NotAuthorizedError("Only the photographer can update this booking.")
        if not booking.is_pending:
            raise InvalidTransitionError(f"Booking is already {booking.status}.")
        try:
            updated = self.repository.transition_status(
                booking_id, from_status=STATUS_PENDING, to_status=new_status
            )
        except Exception as exc:
            logger.exception(
                "Failed to update booking status",
                extra={"booking_id": str(booking_id), "status": new_status},
            )
            raise WriteFailureError("Failed to update booking status.") from exc
        if updated is None:
            raise InvalidTransitionError("Booking is no longer pending.")
        logger.info(
            "Booking status updated",
            extra={"booking_id": str(booking_id), "status": new_status},
        )
        return updated
