"""Supabase repository for user settings."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutriscan.domain.models import UserSettings
from nutriscan.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_settings(self, user_id: UUID) -> UserSettings | None:
        """Return the settings row for a user."""
        response = (
            self.client.table("user_settings")
            .select("timezone, has_seen_welcome")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserSettings(
            timezone=row.get("timezone"),
            has_seen_welcome=bool(row.get("has_seen_welcome", False)),
        )

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Set the user's timezone."""
        self.client.table("user_settings").upsert(
            {"user_id": str(user_id), "timezone": timezone}, on_conflict="user_id"
        ).execute()

    def mark_welcome_seen(self, user_id: UUID) -> None:
        """Flag the goals welcome as shown."""
        self.client.table("user_settings").upsert(
            {"user_id": str(user_id), "has_seen_welcome": True}, on_conflict="user_id"
        ).execute()
