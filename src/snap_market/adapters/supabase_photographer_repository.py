"""Supabase-backed photographer profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from snap_market.domain.photographers import (
    PhotographerProfile,
    PhotographerProfileFields,
)
from snap_market.services.profiles import PhotographerProfileRepository

PHOTOGRAPHER_COLUMNS = (
    "id, user_id, bio, location, city, specialty, hourly_rate, "
    "years_experience, available"
)


@dataclass
class SupabasePhotographerRepository(PhotographerProfileRepository):
    """Supabase implementation for photographer profile persistence."""

    client: Client

    def get_by_user_id(self, user_id: UUID) -> PhotographerProfile | None:
        """Return the photographer profile for a user, if present."""
        response = (
            self.client.table("photographer_profiles")
            .select(PHOTOGRAPHER_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_photographer_profile(response.data[0])

    def create_profile(
        self, user_id: UUID, fields: PhotographerProfileFields
    ) -> PhotographerProfile:
        """Insert a photographer profile row and return it."""
        response = (
            self.client.table("photographer_profiles")
            .insert({"user_id": str(user_id), **_fields_payload(fields)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photographer profile")
        return parse_photographer_profile(response.data[0])

    def update_profile(self, user_id: UUID, fields: PhotographerProfileFields) -> None:
        """Update the photographer profile row of a user in place."""
        self.client.table("photographer_profiles").update(
            _fields_payload(fields)
        ).eq("user_id", str(user_id)).execute()


def _fields_payload(fields: PhotographerProfileFields) -> dict[str, object]:
    return {
        "bio": fields.bio,
        "location": fields.location,
        "city": fields.city,
        "specialty": fields.specialty,
        "hourly_rate": fields.hourly_rate,
        "years_experience": fields.years_experience,
    }


def parse_photographer_profile(row: dict[str, object]) -> PhotographerProfile:
    return PhotographerProfile(
        id=UUID(str(row["id"])) if row.get("id") else None,
        user_id=UUID(str(row["user_id"])),
        bio=row.get("bio"),
        location=row.get("location"),
        city=row.get("city"),
        specialty=row.get("specialty"),
        hourly_rate=_optional_int(row.get("hourly_rate")),
        years_experience=_optional_int(row.get("years_experience")),
        available=bool(row.get("available", True)),
    )


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)
