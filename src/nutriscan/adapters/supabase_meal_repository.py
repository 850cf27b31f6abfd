"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutriscan.domain.analysis import FoodAnalysisResult
from nutriscan.domain.meals import MealRecord
from nutriscan.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, user_id, name, image_url, calories, protein, carbs, fat, health_score, "
    "blood_sugar_impact, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(
        self, user_id: UUID, image_url: str | None, result: FoodAnalysisResult
    ) -> MealRecord:
        """Insert a meal row and return it with its creation timestamp."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": result.food_name,
                    "image_url": image_url,
                    "calories": result.calories,
                    "protein": result.protein,
                    "carbs": result.carbs,
                    "fat": result.fat,
                    "health_score": result.health_score,
                    "blood_sugar_impact": [
                        point.model_dump() for point in result.blood_sugar_impact
                    ],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return parse_meal(response.data[0])

    def list_recent_meals(self, user_id: UUID, limit: int) -> list[MealRecord]:
        """Return recent meals for a user."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_meal(row) for row in response.data or []]


def parse_meal(row: dict[str, object]) -> MealRecord:
    """Convert a ``meals`` row into a record."""
    impact = row.get("blood_sugar_impact")
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        image_url=row.get("image_url"),
        calories=int(row.get("calories") or 0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        health_score=float(row.get("health_score") or 0.0),
        blood_sugar_impact=impact if isinstance(impact, list) else [],
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
