"""Supabase Auth adapter."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutriscan.domain.models import AuthSession, AuthUser
from nutriscan.services.users import AuthGateway


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Supabase implementation of sign-in and token verification.

    Sign-in stores the session on the client it runs on, so each sign-in gets
    a fresh anon-key client from ``session_client_factory``.
    """

    client: Client
    session_client_factory: Callable[[], Client]

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user for an access token."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return _to_auth_user(response.user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self.session_client_factory().auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        return _to_session(response)

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a new account."""
        response = self.session_client_factory().auth.sign_up(
            {"email": email, "password": password}
        )
        return _to_session(response)


def _to_auth_user(user: object) -> AuthUser:
    return AuthUser(id=UUID(str(user.id)), email=getattr(user, "email", None))


def _to_session(response: object) -> AuthSession:
    user = getattr(response, "user", None)
    if user is None:
        raise RuntimeError("Supabase did not return a user")
    session = getattr(response, "session", None)
    return AuthSession(
        user=_to_auth_user(user),
        access_token=session.access_token if session is not None else None,
    )
