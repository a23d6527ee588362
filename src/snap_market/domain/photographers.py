"""Domain models for photographer marketplace listings."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PhotographerProfileFields:
    """Editable fields of a photographer profile."""

    bio: str | None
    location: str | None
    city: str | None
    specialty: str | None
    hourly_rate: int | None
    years_experience: int | None


@dataclass(frozen=True)
class PhotographerProfile:
    """Role-specific extension record of a photographer."""

    id: UUID | None
    user_id: UUID
    bio: str | None
    location: str | None
    city: str | None
    specialty: str | None
    hourly_rate: int | None
    years_experience: int | None
    available: bool = True

    def fields(self) -> PhotographerProfileFields:
        """Return the editable fields of this profile."""
        return PhotographerProfileFields(
            bio=self.bio,
            location=self.location,
            city=self.city,
            specialty=self.specialty,
            hourly_rate=self.hourly_rate,
            years_experience=self.years_experience,
        )


@dataclass(frozen=True)
class PhotographerListing:
    """Photographer profile joined with the owner's display data."""

    profile: PhotographerProfile
    full_name: str | None
    avatar_url: str | None
    email: str | None = None

    @property
    def user_id(self) -> UUID:
        return self.profile.user_id

    @property
    def initials(self) -> str:
        return (self.full_name or "")[:2].upper()
