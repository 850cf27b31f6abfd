"""Models for food analysis results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

GLUCOSE_TIMES: tuple[str, ...] = ("0 min", "30 min", "60 min", "90 min")


class GlucosePoint(BaseModel):
    """Single point of the post-meal blood sugar curve."""

    model_config = ConfigDict(frozen=True)

    time: Literal["0 min", "30 min", "60 min", "90 min"]
    level: float


class FoodAnalysisResult(BaseModel):
    """Estimated nutrition breakdown for a photographed meal."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    food_name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    health_score: int | float = Field(ge=0, le=100)
    blood_sugar_impact: list[GlucosePoint] = Field(min_length=4, max_length=4)
    explanation: str | None = None
    advice: str | None = None

    @field_validator("blood_sugar_impact")
    @classmethod
    def _check_schedule(cls, points: list[GlucosePoint]) -> list[GlucosePoint]:
        if tuple(point.time for point in points) != GLUCOSE_TIMES:
            raise ValueError("bloodSugarImpact must be sampled at 0/30/60/90 min")
        return points


class AnalysisOutcome(BaseModel):
    """Analysis result tagged with where it came from."""

    source: Literal["model", "fallback"]
    result: FoodAnalysisResult
