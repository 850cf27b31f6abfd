"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutriscan.domain.models import UserSettings


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_settings(self, user_id: UUID) -> UserSettings | None:
        """Return the user's settings row if present."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""

    def mark_welcome_seen(self, user_id: UUID) -> None:
        """Record that the goals welcome was shown."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the configured default if unset."""
        settings = self.repository.get_settings(user_id)
        if settings is None or not settings.timezone:
            return self.default_timezone
        return settings.timezone

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        self.repository.set_timezone(user_id, timezone)

    def consume_welcome(self, user_id: UUID) -> bool:
        """Return True the first time a user opens their goals."""
        settings = self.repository.get_settings(user_id)
        if settings is not None and settings.has_seen_welcome:
            return False
        self.repository.mark_welcome_seen(user_id)
        return True
