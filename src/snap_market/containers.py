"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import Client, create_client
from supabase.client import ClientOptions

from snap_market.adapters.supabase_auth_client import SupabaseAuthClient
from snap_market.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from snap_market.adapters.supabase_listing_repository import (
    SupabaseListingRepository,
)
from snap_market.adapters.supabase_photographer_repository import (
    SupabasePhotographerRepository,
)
from snap_market.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from snap_market.config import Settings
from snap_market.services.auth import SessionGuard
from snap_market.services.bookings import BookingService
from snap_market.services.listing import ListingService
from snap_market.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_guard: SessionGuard
    profile_service: ProfileService
    listing_service: ListingService
    booking_service: BookingService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()

    def new_client() -> Client:
        return create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_service_key,
            options=ClientOptions(
                postgrest_client_timeout=resolved_settings.request_timeout_seconds,
                auto_refresh_token=False,
                persist_session=False,
            ),
        )

    supabase_client = new_client()
    profile_service = ProfileService(
        profile_repository=SupabaseProfileRepository(supabase_client),
        photographer_repository=SupabasePhotographerRepository(supabase_client),
    )
    listing_service = ListingService(SupabaseListingRepository(supabase_client))
    booking_service = BookingService(
        repository=SupabaseBookingRepository(supabase_client),
        profile_service=profile_service,
    )
    session_guard = SessionGuard(
        SupabaseAuthClient(client=supabase_client, client_factory=new_client)
    )

    return AppContainer(
        settings=resolved_settings,
        session_guard=session_guard,
        profile_service=profile_service,
        listing_service=listing_service,
        booking_service=booking_service,
    )
