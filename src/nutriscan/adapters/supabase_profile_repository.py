"""Supabase repositories for profiles and goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutriscan.domain.profiles import Goal, Profile
from nutriscan.services.profiles import GoalRepository, ProfileRepository

PROFILE_COLUMNS = (
    "age, gender, height, weight, weight_goal, exercise_frequency, "
    "preferred_workouts, daily_calorie_goal"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``profiles`` table."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile, or None when onboarding was never completed."""
        response = (
            self.client.table("profiles")
            .select(PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = {
            key: value for key, value in response.data[0].items() if value is not None
        }
        if not row:
            return None
        return Profile.model_validate(row)

    def save_profile(self, user_id: UUID, profile: Profile) -> Profile:
        """Upsert the profile row."""
        payload: dict[str, object] = {
            "id": str(user_id),
            **profile.model_dump(),
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        response = self.client.table("profiles").upsert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to save profile")
        return profile


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Goals stored as a JSON ``goals`` column on ``user_settings``."""

    client: Client

    def list_goals(self, user_id: UUID) -> list[Goal] | None:
        """Return saved goals, or None when the user has no goals document."""
        response = (
            self.client.table("user_settings")
            .select("goals")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data or response.data[0].get("goals") is None:
            return None
        return [Goal.model_validate(goal) for goal in response.data[0]["goals"]]

    def replace_goals(self, user_id: UUID, goals: list[Goal]) -> None:
        """Overwrite the goals document for the user."""
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                "goals": [goal.model_dump() for goal in goals],
            },
            on_conflict="user_id",
        ).execute()
