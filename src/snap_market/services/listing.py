"""Discovery listing and client-side search."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from snap_market.domain.errors import FetchFailureError
from snap_market.domain.photographers import PhotographerListing

logger = logging.getLogger(__name__)


class ListingRepository(Protocol):
    """Persistence interface for photographer listings."""

    def list_available(self) -> list[PhotographerListing]:
        """Return every photographer profile flagged available."""

    def get_listing(self, user_id: UUID) -> PhotographerListing | None:
        """Return the listing of one photographer, if present."""


@dataclass
class ListingService:
    """Application service for the discovery pages."""

    repository: ListingRepository

    def list_available_photographers(self) -> list[PhotographerListing]:
        """Return all available photographers with their display data."""
        try:
            return self.repository.list_available()
        except Exception as exc:
            logger.exception("Failed to load photographers")
            raise FetchFailureError(
                "Failed to load photographers. Please try again."
            ) from exc

    def get_photographer(self, user_id: UUID) -> PhotographerListing | None:
        """Return one photographer's public listing, if present."""
        try:
            return self.repository.get_listing(user_id)
        except Exception as exc:
            logger.exception(
                "Failed to load photographer", extra={"user_id": str(user_id)}
            )
            raise FetchFailureError("Failed to load photographer profile.") from exc


def filter_photographers(
    listings: list[PhotographerListing], query: str | None
) -> list[PhotographerListing]:
    """Filter fetched listings by name, specialty or city without refetching."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(listings)
    return [listing for listing in listings if _matches(listing, needle)]


def _matches(listing: PhotographerListing, needle: str) -> bool:
    candidates = (
        listing.full_name,
        listing.profile.specialty,
        listing.profile.city,
    )
    return any(needle in value.lower() for value in candidates if value)
