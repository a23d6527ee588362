"""Session guard for protected pages."""

import logging
from dataclasses import dataclass
from typing import Protocol

from snap_market.domain.errors import (
    AuthRequiredError,
    WriteFailureError,
    error_message,
)
from snap_market.domain.models import ROLES, AuthSession

logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for the hosted authentication provider."""

    def get_user(self, access_token: str) -> AuthSession | None:
        """Return the session for an access token, if it is still valid."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_up(
        self, email: str, password: str, full_name: str, role: str
    ) -> AuthSession | None:
        """Create an account; return a session when no confirmation is pending."""

    def refresh(self, refresh_token: str) -> AuthSession | None:
        """Exchange a refresh token for a new session, if it is still valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""


@dataclass
class SessionGuard:
    """Resolve the current identity and gate protected pages."""

    client: AuthClient

    def get_current_session(
        self, access_token: str | None, refresh_token: str | None = None
    ) -> AuthSession | None:
        """Return the active session, or None when there is none.

        An expired or missing access token is exchanged for a new session when
        a refresh token is available; the returned session then carries the
        rotated tokens.
        """
        session = self._resolve(access_token) if access_token else None
        if session is not None:
            return AuthSession(
                user_id=session.user_id,
                email=session.email,
                access_token=access_token,
                refresh_token=refresh_token,
            )
        if not refresh_token:
            return None
        return self._refresh(refresh_token)

    def require_session(
        self, access_token: str | None, refresh_token: str | None = None
    ) -> AuthSession:
        """Return the active session or raise AuthRequiredError."""
        session = self.get_current_session(access_token, refresh_token)
        if session is None:
            raise AuthRequiredError
        return session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and return the new session."""
        try:
            return self.client.sign_in(email.strip(), password)
        except Exception as exc:
            logger.warning("Sign in failed", extra={"email": email})
            raise WriteFailureError(error_message(exc, "Failed to sign in.")) from exc

    def sign_up(
        self, email: str, password: str, full_name: str, role: str
    ) -> AuthSession | None:
        """Create an account with the chosen role."""
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        try:
            return self.client.sign_up(email.strip(), password, full_name.strip(), role)
        except Exception as exc:
            logger.warning("Sign up failed", extra={"email": email})
            raise WriteFailureError(
                error_message(exc, "Failed to create account.")
            ) from exc

    def sign_out(self, session: AuthSession) -> None:
        """Revoke the session at the provider; failures are only logged."""
        try:
            self.client.sign_out(session.access_token)
        except Exception:
            logger.exception(
                "Failed to revoke session", extra={"user_id": str(session.user_id)}
            )

    def _resolve(self, access_token: str) -> AuthSession | None:
        try:
            return self.client.get_user(access_token)
        except Exception:
            logger.exception("Failed to resolve session")
            return None

    def _refresh(self, refresh_token: str) -> AuthSession | None:
        try:
            session = self.client.refresh(refresh_token)
        except Exception:
            logger.exception("Failed to refresh session")
            return None
        if session is not None:
            logger.info("Session refreshed", extra={"user_id": str(session.user_id)})
        return session
