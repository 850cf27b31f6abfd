"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class MealRecord:
    """A persisted meal with nutrition and glucose-impact data."""

    id: UUID
    user_id: UUID
    name: str
    image_url: str | None
    calories: int
    protein: float
    carbs: float
    fat: float
    health_score: float
    blood_sugar_impact: list[object]
    created_at: datetime


@dataclass(frozen=True)
class StoredImage:
    """Reference to an uploaded meal photo."""

    path: str
    public_url: str
