"""Domain models for users and their settings."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user identity supplied by the auth provider."""

    id: UUID
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """Result of a sign-in or registration."""

    user: AuthUser
    access_token: str | None


@dataclass(frozen=True)
class UserSettings:
    """Per-user application state."""

    timezone: str | None
    has_seen_welcome: bool
