"""Profile and photographer profile access."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from snap_market.domain.errors import (
    FetchFailureError,
    NotAuthorizedError,
    ValidationError,
    WriteFailureError,
    error_message,
)
from snap_market.domain.models import Profile
from snap_market.domain.photographers import (
    PhotographerProfile,
    PhotographerProfileFields,
)

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for base profiles."""

    def find_profiles(self, user_id: UUID) -> list[Profile]:
        """Return every profile row matching the user id."""


class PhotographerProfileRepository(Protocol):
    """Persistence interface for photographer profiles."""

    def get_by_user_id(self, user_id: UUID) -> PhotographerProfile | None:
        """Return the photographer profile for a user, if present."""

    def create_profile(
        self, user_id: UUID, fields: PhotographerProfileFields
    ) -> PhotographerProfile:
        """Insert a photographer profile row and return it."""

    def update_profile(self, user_id: UUID, fields: PhotographerProfileFields) -> None:
        """Update the photographer profile row of a user in place."""


@dataclass
class ProfileService:
    """Application service for profile reads and writes."""

    profile_repository: ProfileRepository
    photographer_repository: PhotographerProfileRepository

    def fetch_profile(self, user_id: UUID) -> Profile:
        """Return the single profile of a user."""
        try:
            profiles = self.profile_repository.find_profiles(user_id)
        except Exception as exc:
            logger.exception("Failed to load profile", extra={"user_id": str(user_id)})
            raise FetchFailureError("Failed to load profile.") from exc
        if len(profiles) != 1:
            logger.warning(
                "Expected exactly one profile",
                extra={"user_id": str(user_id), "count": len(profiles)},
            )
            raise FetchFailureError("Failed to load profile.")
        return profiles[0]

    def profile_exists(self, user_id: UUID) -> bool:
        """Return True when a profile row exists for the user id."""
        try:
            return bool(self.profile_repository.find_profiles(user_id))
        except Exception as exc:
            logger.exception(
                "Failed to look up profile", extra={"user_id": str(user_id)}
            )
            raise FetchFailureError("Failed to load profile.") from exc

    def fetch_photographer_profile(self, user_id: UUID) -> PhotographerProfile | None:
        """Return the photographer profile of a user; None when not configured."""
        try:
            return self.photographer_repository.get_by_user_id(user_id)
        except Exception as exc:
            logger.exception(
                "Failed to load photographer profile", extra={"user_id": str(user_id)}
            )
            raise FetchFailureError("Failed to load profile.") from exc

    def upsert_photographer_profile(
        self, actor_id: UUID, user_id: UUID, fields: PhotographerProfileFields
    ) -> None:
        """Update the user's photographer profile in place, or create it."""
        if actor_id != user_id:
            raise NotAuthorizedError("You can only edit your own profile.")
        existing = self.fetch_photographer_profile(user_id)
        try:
            if existing is None:
                self.photographer_repository.create_profile(user_id, fields)
            else:
                self.photographer_repository.update_profile(user_id, fields)
        except Exception as exc:
            logger.exception(
                "Failed to save photographer profile", extra={"user_id": str(user_id)}
            )
            raise WriteFailureError(
                error_message(exc, "Failed to update profile.")
            ) from exc


def parse_optional_int(raw: str | None, field: str) -> int | None:
    """Parse a non-negative whole number from form input; blank means absent."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    if not cleaned.isdecimal():
        raise ValidationError(f"{field} must be a whole number.")
    return int(cleaned)
