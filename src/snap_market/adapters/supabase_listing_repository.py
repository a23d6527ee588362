"""Supabase queries for the discovery listing."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from snap_market.adapters.supabase_photographer_repository import (
    PHOTOGRAPHER_COLUMNS,
    parse_photographer_profile,
)
from snap_market.domain.photographers import PhotographerListing
from snap_market.services.listing import ListingRepository


@dataclass
class SupabaseListingRepository(ListingRepository):
    """Supabase implementation for photographer listings."""

    client: Client

    def list_available(self) -> list[PhotographerListing]:
        """Return available photographers joined with their profile."""
        response = (
            self.client.table("photographer_profiles")
            .select(f"{PHOTOGRAPHER_COLUMNS}, profiles(full_name, avatar_url)")
            .eq("available", True)
            .execute()
        )
        return [_parse_listing(row) for row in response.data or []]

    def get_listing(self, user_id: UUID) -> PhotographerListing | None:
        """Return one photographer joined with name, email and avatar."""
        response = (
            self.client.table("photographer_profiles")
            .select(
                f"{PHOTOGRAPHER_COLUMNS}, profiles(id, full_name, email, avatar_url)"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_listing(response.data[0])


def _parse_listing(row: dict[str, object]) -> PhotographerListing:
    owner = _embedded(row.get("profiles"))
    return PhotographerListing(
        profile=parse_photographer_profile(row),
        full_name=owner.get("full_name"),
        avatar_url=owner.get("avatar_url"),
        email=owner.get("email"),
    )


def _embedded(value: object) -> dict[str, object]:
    """Return a to-one embedded resource, which PostgREST may wrap in a list."""
    if isinstance(value, list):
        return value[0] if value else {}
    if isinstance(value, dict):
        return value
    return {}
