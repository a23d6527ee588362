"""Supabase Auth adapter."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from snap_market.domain.models import AuthSession
from snap_market.services.auth import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Supabase implementation of the auth provider interface.

    Sign-in, sign-up and refresh run on a fresh client from ``client_factory``
    so the resulting user session never becomes the auth state of the shared
    client used by the repositories.
    """

    client: Client
    client_factory: Callable[[], Client]

    def get_user(self, access_token: str) -> AuthSession | None:
        """Return the session for an access token, if it is still valid."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return AuthSession(
            user_id=UUID(str(response.user.id)),
            email=response.user.email,
            access_token=access_token,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self.client_factory().auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        session = _to_session(response)
        if session is None:
            raise RuntimeError("Sign in returned no session")
        return session

    def sign_up(
        self, email: str, password: str, full_name: str, role: str
    ) -> AuthSession | None:
        """Create an account carrying the display name and role as metadata."""
        response = self.client_factory().auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"data": {"full_name": full_name, "role": role}},
            }
        )
        return _to_session(response)

    def refresh(self, refresh_token: str) -> AuthSession | None:
        """Exchange a refresh token for a rotated session."""
        response = self.client_factory().auth.refresh_session(refresh_token)
        return _to_session(response)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        self.client.auth.admin.sign_out(access_token)


def _to_session(response: object) -> AuthSession | None:
    session = getattr(response, "session", None)
    user = getattr(response, "user", None) or getattr(session, "user", None)
    if session is None or user is None:
        return None
    return AuthSession(
        user_id=UUID(str(user.id)),
        email=user.email,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )
