"""Authentication business logic."""

from dataclasses import dataclass
from typing import Protocol

from nutriscan.domain.models import AuthSession, AuthUser


class AuthGateway(Protocol):
    """Interface to the hosted authentication provider."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning a valid access token."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a new account."""


@dataclass
class UserService:
    """Application service for sign-in and identity checks."""

    gateway: AuthGateway

    def authenticate(self, access_token: str) -> AuthUser | None:
        """Return the user for a bearer token, or None when it is invalid."""
        token = access_token.strip()
        if not token:
            return None
        return self.gateway.get_user(token)

    def login(self, email: str, password: str) -> AuthSession:
        """Sign an existing user in."""
        return self.gateway.sign_in(email.strip(), password)

    def register(self, email: str, password: str) -> AuthSession:
        """Create an account."""
        return self.gateway.sign_up(email.strip(), password)
