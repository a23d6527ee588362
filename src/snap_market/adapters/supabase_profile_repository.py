"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from snap_market.domain.models import Profile
from snap_market.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for base profile reads."""

    client: Client

    def find_profiles(self, user_id: UUID) -> list[Profile]:
        """Return every profile row matching the user id."""
        response = (
            self.client.table("profiles")
            .select("id, full_name, avatar_url, role, email")
            .eq("id", str(user_id))
            .execute()
        )
        return [parse_profile(row) for row in response.data or []]


def parse_profile(row: dict[str, object]) -> Profile:
    return Profile(
        id=UUID(str(row["id"])),
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
        role=str(row.get("role") or "client"),
        email=row.get("email"),
    )
