"""Supabase repository for meal statistics."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutriscan.adapters.supabase_meal_repository import MEAL_COLUMNS, parse_meal
from nutriscan.domain.meals import MealRecord
from nutriscan.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals created in the time range."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_meal(row) for row in response.data or []]
