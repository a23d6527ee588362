"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from snap_market.api.app import create_app
from snap_market.api.web import ACCESS_COOKIE
from snap_market.config import Settings
from snap_market.containers import AppContainer
from snap_market.domain.bookings import Booking
from snap_market.domain.models import (
    ROLE_CLIENT,
    ROLE_PHOTOGRAPHER,
    AuthSession,
    Profile,
)
from snap_market.domain.photographers import (
    PhotographerListing,
    PhotographerProfile,
    PhotographerProfileFields,
)
from snap_market.services.auth import AuthClient, SessionGuard
from snap_market.services.bookings import BookingRepository, BookingService
from snap_market.services.listing import ListingRepository, ListingService
from snap_market.services.profiles import (
    PhotographerProfileRepository,
    ProfileRepository,
    ProfileService,
)

PHOTOGRAPHER_TOKEN = "photographer-token"
CLIENT_TOKEN = "client-token"


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: list[Profile] = field(default_factory=list)
    calls: list[UUID] = field(default_factory=list)
    fail: bool = False

    def find_profiles(self, user_id: UUID) -> list[Profile]:
        self.calls.append(user_id)
        if self.fail:
            raise RuntimeError("profiles unavailable")
        return [profile for profile in self.profiles if profile.id == user_id]

    def add(self, full_name: str, role: str) -> Profile:
        profile = Profile(
            id=uuid4(),
            full_name=full_name,
            avatar_url=None,
            role=role,
            email=f"{full_name.split()[0].lower()}@example.com",
        )
        self.profiles.append(profile)
        return profile


@dataclass
class InMemoryPhotographerRepository(PhotographerProfileRepository):
    """In-memory photographer profile repository for tests."""

    profiles: dict[UUID, PhotographerProfile] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail_writes: bool = False

    def get_by_user_id(self, user_id: UUID) -> PhotographerProfile | None:
        self.calls.append("get")
        return self.profiles.get(user_id)

    def create_profile(
        self, user_id: UUID, fields: PhotographerProfileFields
    ) -> PhotographerProfile:
        self.calls.append("create")
        if self.fail_writes:
            raise RuntimeError("duplicate key value violates unique constraint")
        if user_id in self.profiles:
            raise RuntimeError("duplicate key value violates unique constraint")
        profile = _photographer_from_fields(uuid4(), user_id, fields, available=True)
        self.profiles[user_id] = profile
        return profile

    def update_profile(self, user_id: UUID, fields: PhotographerProfileFields) -> None:
        self.calls.append("update")
        if self.fail_writes:
            raise RuntimeError("update rejected")
        current = self.profiles[user_id]
        self.profiles[user_id] = _photographer_from_fields(
            current.id, user_id, fields, available=current.available
        )

    def put(
        self, user_id: UUID, available: bool = True, **overrides: object
    ) -> PhotographerProfile:
        values: dict[str, object] = {
            "bio": "Natural light photographer.",
            "location": "NY",
            "city": "New York",
            "specialty": "Portrait",
            "hourly_rate": 120,
            "years_experience": 6,
        }
        values.update(overrides)
        profile = _photographer_from_fields(
            uuid4(), user_id, PhotographerProfileFields(**values), available=available
        )
        self.profiles[user_id] = profile
        return profile


@dataclass
class InMemoryListingRepository(ListingRepository):
    """In-memory listing repository joining the other in-memory stores."""

    profile_repository: InMemoryProfileRepository
    photographer_repository: InMemoryPhotographerRepository
    calls: list[str] = field(default_factory=list)
    fail: bool = False

    def list_available(self) -> list[PhotographerListing]:
        self.calls.append("list")
        if self.fail:
            raise RuntimeError("listing unavailable")
        return [
            self._join(profile)
            for profile in self.photographer_repository.profiles.values()
            if profile.available
        ]

    def get_listing(self, user_id: UUID) -> PhotographerListing | None:
        self.calls.append("get")
        profile = self.photographer_repository.profiles.get(user_id)
        if profile is None:
            return None
        return self._join(profile)

    def _join(self, profile: PhotographerProfile) -> PhotographerListing:
        owner = next(
            (p for p in self.profile_repository.profiles if p.id == profile.user_id),
            None,
        )
        return PhotographerListing(
            profile=profile,
            full_name=owner.full_name if owner else None,
            avatar_url=owner.avatar_url if owner else None,
            email=owner.email if owner else None,
        )


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory booking repository for tests."""

    profile_repository: InMemoryProfileRepository
    bookings: dict[UUID, Booking] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    clock: datetime = field(
        default_factory=lambda: datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    )

    def create_booking(  # noqa: PLR0913
        self,
        client_id: UUID,
        photographer_id: UUID,
        service_type: str,
        preferred_date: date,
        message: str,
        status: str,
    ) -> Booking:
        self.calls.append("create")
        self.clock += timedelta(minutes=1)
        booking = Booking(
            id=uuid4(),
            client_id=client_id,
            photographer_id=photographer_id,
            service_type=service_type,
            preferred_date=preferred_date,
            message=message,
            status=status,
            created_at=self.clock,
        )
        self.bookings[booking.id] = booking
        return booking

    def get_booking(self, booking_id: UUID) -> Booking | None:
        self.calls.append("get")
        booking = self.bookings.get(booking_id)
        return self._with_names(booking) if booking else None

    def list_for_user(self, user_id: UUID) -> list[Booking]:
        self.calls.append("list")
        return [
            self._with_names(booking)
            for booking in self.bookings.values()
            if booking.involves(user_id)
        ]

    def transition_status(
        self, booking_id: UUID, from_status: str, to_status: str
    ) -> Booking | None:
        self.calls.append("transition")
        booking = self.bookings.get(booking_id)
        if booking is None or booking.status != from_status:
            return None
        updated = Booking(
            id=booking.id,
            client_id=booking.client_id,
            photographer_id=booking.photographer_id,
            service_type=booking.service_type,
            preferred_date=booking.preferred_date,
            message=booking.message,
            status=to_status,
            created_at=booking.created_at,
        )
        self.bookings[booking_id] = updated
        return updated

    def _with_names(self, booking: Booking) -> Booking:
        names = {p.id: p.full_name for p in self.profile_repository.profiles}
        return Booking(
            id=booking.id,
            client_id=booking.client_id,
            photographer_id=booking.photographer_id,
            service_type=booking.service_type,
            preferred_date=booking.preferred_date,
            message=booking.message,
            status=booking.status,
            created_at=booking.created_at,
            client_name=names.get(booking.client_id),
            photographer_name=names.get(booking.photographer_id),
        )


@dataclass
class FakeAuthClient(AuthClient):
    """Fake auth provider keyed by access token."""

    sessions: dict[str, AuthSession] = field(default_factory=dict)
    passwords: dict[str, tuple[str, str]] = field(default_factory=dict)
    signed_up: list[dict[str, str]] = field(default_factory=list)
    signed_out: list[str] = field(default_factory=list)
    refreshable: dict[str, AuthSession] = field(default_factory=dict)
    confirm_email: bool = False
    fail: bool = False

    def get_user(self, access_token: str) -> AuthSession | None:
        if self.fail:
            raise RuntimeError("auth provider unavailable")
        return self.sessions.get(access_token)

    def sign_in(self, email: str, password: str) -> AuthSession:
        stored = self.passwords.get(email)
        if stored is None or stored[0] != password:
            raise RuntimeError("Invalid login credentials")
        return self.sessions[stored[1]]

    def sign_up(
        self, email: str, password: str, full_name: str, role: str
    ) -> AuthSession | None:
        self.signed_up.append({"email": email, "full_name": full_name, "role": role})
        if self.confirm_email:
            return None
        token = f"token-{len(self.signed_up)}"
        session = AuthSession(
            user_id=uuid4(), email=email, access_token=token, refresh_token="refresh"
        )
        self.sessions[token] = session
        self.passwords[email] = (password, token)
        return session

    def refresh(self, refresh_token: str) -> AuthSession | None:
        if self.fail:
            raise RuntimeError("auth provider unavailable")
        session = self.refreshable.pop(refresh_token, None)
        if session is not None:
            self.sessions[session.access_token] = session
        return session

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.sessions.pop(access_token, None)

    def register(self, profile: Profile, token: str, password: str = "secret") -> None:
        self.sessions[token] = AuthSession(
            user_id=profile.id,
            email=profile.email,
            access_token=token,
            refresh_token=f"{token}-refresh",
        )
        if profile.email:
            self.passwords[profile.email] = (password, token)


def _photographer_from_fields(
    profile_id: UUID,
    user_id: UUID,
    fields: PhotographerProfileFields,
    available: bool,
) -> PhotographerProfile:
    return PhotographerProfile(
        id=profile_id,
        user_id=user_id,
        bio=fields.bio,
        location=fields.location,
        city=fields.city,
        specialty=fields.specialty,
        hourly_rate=fields.hourly_rate,
        years_experience=fields.years_experience,
        available=available,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        environment="test",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def photographer_repository() -> InMemoryPhotographerRepository:
    return InMemoryPhotographerRepository()


@pytest.fixture
def listing_repository(
    profile_repository: InMemoryProfileRepository,
    photographer_repository: InMemoryPhotographerRepository,
) -> InMemoryListingRepository:
    return InMemoryListingRepository(profile_repository, photographer_repository)


@pytest.fixture
def booking_repository(
    profile_repository: InMemoryProfileRepository,
) -> InMemoryBookingRepository:
    return InMemoryBookingRepository(profile_repository)


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def profile_service(
    profile_repository: InMemoryProfileRepository,
    photographer_repository: InMemoryPhotographerRepository,
) -> ProfileService:
    return ProfileService(profile_repository, photographer_repository)


@pytest.fixture
def booking_service(
    booking_repository: InMemoryBookingRepository, profile_service: ProfileService
) -> BookingService:
    return BookingService(booking_repository, profile_service)


@pytest.fixture
def photographer(
    profile_repository: InMemoryProfileRepository, auth_client: FakeAuthClient
) -> Profile:
    profile = profile_repository.add("Ada Lens", ROLE_PHOTOGRAPHER)
    auth_client.register(profile, PHOTOGRAPHER_TOKEN)
    return profile


@pytest.fixture
def client_profile(
    profile_repository: InMemoryProfileRepository, auth_client: FakeAuthClient
) -> Profile:
    profile = profile_repository.add("Carl Client", ROLE_CLIENT)
    auth_client.register(profile, CLIENT_TOKEN)
    return profile


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    auth_client: FakeAuthClient,
    profile_service: ProfileService,
    booking_service: BookingService,
    listing_repository: InMemoryListingRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        session_guard=SessionGuard(auth_client),
        profile_service=profile_service,
        listing_service=ListingService(listing_repository),
        booking_service=booking_service,
    )


@pytest.fixture
def web_client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container), follow_redirects=False)


def sign_in_as(client: TestClient, token: str) -> TestClient:
    """Attach a session cookie to a test client."""
    client.cookies.set(ACCESS_COOKIE, token)
    return client
