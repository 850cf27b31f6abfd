"""Models for the health profile and goals."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Profile(BaseModel):
    """Health profile collected during onboarding."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    age: int = Field(default=30, ge=18, le=120)
    gender: Literal["male", "female", "other"] = "male"
    height: float = Field(default=170, ge=100, le=250)
    weight: float = Field(default=70, ge=30, le=300)
    weight_goal: float = Field(default=70, ge=30, le=300)
    exercise_frequency: int = Field(default=3, ge=0, le=7)
    preferred_workouts: list[str] = Field(default_factory=list)
    daily_calorie_goal: int | None = Field(default=None, ge=1000, le=5000)


class Goal(BaseModel):
    """A user health goal such as a calorie limit."""

    id: str
    name: str
    target: float = 0
    unit: str = ""
    priority: Literal["high", "medium", "low"] = "medium"


DEFAULT_GOALS: tuple[Goal, ...] = (
    Goal(id="1", name="Daily Calorie Limit", target=2000, unit="kcal", priority="high"),
    Goal(id="2", name="Protein Intake", target=120, unit="g", priority="medium"),
    Goal(
        id="3", name="Keep Blood Sugar Below", target=140, unit="mg/dL", priority="high"
    ),
)
