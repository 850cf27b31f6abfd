"""Request and response models for the HTTP API."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

from nutriscan.domain.analysis import FoodAnalysisResult
from nutriscan.domain.meals import MealRecord
from nutriscan.domain.profiles import Goal
from nutriscan.domain.stats import DailyStats, WeeklyDatum
from nutriscan.services.stats import Dashboard


class ApiModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(ApiModel):
    mode: Literal["login"]
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class RegisterRequest(ApiModel):
    mode: Literal["register"]
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class AuthRequest(
    RootModel[
        Annotated[LoginRequest | RegisterRequest, Field(discriminator="mode")]
    ]
):
    """Login or registration form, tagged by ``mode``."""


class UserOut(ApiModel):
    id: str
    email: str | None


class AuthResponse(ApiModel):
    access_token: str | None
    requires_confirmation: bool
    user: UserOut


class AnalyzeRequest(ApiModel):
    image_data: str | None = None


class SaveMealRequest(ApiModel):
    image_data: str | None = None
    result: FoodAnalysisResult


class MealOut(ApiModel):
    id: str
    name: str
    image_url: str | None
    calories: int
    protein: float
    carbs: float
    fat: float
    health_score: float
    blood_sugar_impact: list[Any]
    created_at: str

    @classmethod
    def from_record(cls, meal: MealRecord) -> "MealOut":
        return cls(
            id=str(meal.id),
            name=meal.name,
            image_url=meal.image_url,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            health_score=meal.health_score,
            blood_sugar_impact=meal.blood_sugar_impact,
            created_at=meal.created_at.isoformat(),
        )


class DailyStatsOut(ApiModel):
    calories: int
    calorie_goal: int
    blood_sugar_avg: float
    meal_count: int
    health_score: float

    @classmethod
    def from_stats(cls, stats: DailyStats) -> "DailyStatsOut":
        return cls(
            calories=stats.calories,
            calorie_goal=stats.calorie_goal,
            blood_sugar_avg=stats.blood_sugar_avg,
            meal_count=stats.meal_count,
            health_score=stats.health_score,
        )


class WeeklyDatumOut(ApiModel):
    day: str
    calories: int
    health_score: float

    @classmethod
    def from_datum(cls, datum: WeeklyDatum) -> "WeeklyDatumOut":
        return cls(
            day=datum.day, calories=datum.calories, health_score=datum.health_score
        )


class DashboardOut(ApiModel):
    daily: DailyStatsOut
    weekly: list[WeeklyDatumOut]

    @classmethod
    def from_dashboard(cls, dashboard: Dashboard) -> "DashboardOut":
        return cls(
            daily=DailyStatsOut.from_stats(dashboard.daily),
            weekly=[WeeklyDatumOut.from_datum(datum) for datum in dashboard.weekly],
        )


class GoalsOut(ApiModel):
    goals: list[Goal]
    show_welcome: bool = False


class GoalsIn(ApiModel):
    goals: list[Goal]


class TimezoneIn(ApiModel):
    timezone: str
