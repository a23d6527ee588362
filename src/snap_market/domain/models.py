"""Domain models for accounts and base profiles."""

from dataclasses import dataclass
from uuid import UUID

ROLE_CLIENT = "client"
ROLE_PHOTOGRAPHER = "photographer"
ROLES = frozenset({ROLE_CLIENT, ROLE_PHOTOGRAPHER})


@dataclass(frozen=True)
class AuthSession:
    """Authenticated identity issued by the auth provider."""

    user_id: UUID
    email: str | None
    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class Profile:
    """Base user record with a role discriminator."""

    id: UUID
    full_name: str | None
    avatar_url: str | None
    role: str
    email: str | None = None

    @property
    def is_photographer(self) -> bool:
        return self.role == ROLE_PHOTOGRAPHER

    @property
    def initials(self) -> str:
        return (self.full_name or "")[:2].upper()
