"""Health profile and goals services."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutriscan.domain.profiles import DEFAULT_GOALS, Goal, Profile


class ProfileRepository(Protocol):
    """Persistence interface for health profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile if present."""

    def save_profile(self, user_id: UUID, profile: Profile) -> Profile:
        """Create or update the profile and return it."""


class GoalRepository(Protocol):
    """Persistence interface for health goals."""

    def list_goals(self, user_id: UUID) -> list[Goal] | None:
        """Return saved goals, or None when the user never saved any."""

    def replace_goals(self, user_id: UUID, goals: list[Goal]) -> None:
        """Replace all goals for the user."""


@dataclass
class ProfileService:
    """Service for onboarding profile data."""

    repository: ProfileRepository
    default_calorie_goal: int

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile."""
        return self.repository.get_profile(user_id)

    def save_profile(self, user_id: UUID, profile: Profile) -> Profile:
        """Persist onboarding answers."""
        return self.repository.save_profile(user_id, profile)

    def get_calorie_goal(self, user_id: UUID) -> int:
        """Return the daily calorie goal, falling back to the default."""
        profile = self.repository.get_profile(user_id)
        if profile is None or profile.daily_calorie_goal is None:
            return self.default_calorie_goal
        return profile.daily_calorie_goal


@dataclass
class GoalService:
    """Service for health goals."""

    repository: GoalRepository

    def get_goals(self, user_id: UUID) -> list[Goal]:
        """Return saved goals or the starter set for new users."""
        goals = self.repository.list_goals(user_id)
        if goals is None:
            return list(DEFAULT_GOALS)
        return goals

    def save_goals(self, user_id: UUID, goals: list[Goal]) -> list[Goal]:
        """Save goals, dropping entries without a name."""
        valid = [goal for goal in goals if goal.name.strip()]
        self.repository.replace_goals(user_id, valid)
        return valid
