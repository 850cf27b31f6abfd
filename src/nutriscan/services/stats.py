"""Dashboard statistics for logged meals."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutriscan.domain.meals import MealRecord
from nutriscan.domain.stats import WEEKDAY_LABELS, DailyStats, WeeklyDatum

WEEK_DAYS = 7


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals created within a time range."""


@dataclass
class Dashboard:
    """Daily and weekly projections shown on the dashboard."""

    daily: DailyStats
    weekly: list[WeeklyDatum]


@dataclass
class StatsService:
    """Service for computing dashboard stats by timezone."""

    repository: StatsRepository
    blood_sugar_default: float

    def get_dashboard(
        self, user_id: UUID, timezone_name: str, calorie_goal: int
    ) -> Dashboard:
        """Return today's stats and the trailing week in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        now = datetime.now(tz=tz)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start = today - timedelta(days=WEEK_DAYS - 1)
        end = today + timedelta(days=1)
        meals = self.repository.list_meals(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return Dashboard(
            daily=summarize_day(
                meals,
                day=today.date(),
                tz=tz,
                calorie_goal=calorie_goal,
                blood_sugar_default=self.blood_sugar_default,
            ),
            weekly=aggregate_week(meals, tz),
        )


def aggregate_week(meals: Iterable[MealRecord], tz: ZoneInfo) -> list[WeeklyDatum]:
    """Fold meals into one bucket per weekday, always Mon through Sun."""
    calories = [0] * WEEK_DAYS
    score_sums = [0.0] * WEEK_DAYS
    counts = [0] * WEEK_DAYS
    for meal in meals:
        index = meal.created_at.astimezone(tz).weekday()
        calories[index] += meal.calories
        score_sums[index] += meal.health_score
        counts[index] += 1

    return [
        WeeklyDatum(
            day=label,
            calories=calories[index],
            health_score=(
                round(score_sums[index] / counts[index], 1) if counts[index] else 0
            ),
        )
        for index, label in enumerate(WEEKDAY_LABELS)
    ]


def summarize_day(
    meals: Iterable[MealRecord],
    *,
    day: date,
    tz: ZoneInfo,
    calorie_goal: int,
    blood_sugar_default: float,
) -> DailyStats:
    """Aggregate the meals created on ``day`` into a single summary."""
    todays = [meal for meal in meals if meal.created_at.astimezone(tz).date() == day]
    levels = [
        level for meal in todays for level in _valid_levels(meal.blood_sugar_impact)
    ]
    meal_count = len(todays)
    return DailyStats(
        calories=sum(meal.calories for meal in todays),
        calorie_goal=calorie_goal,
        blood_sugar_avg=sum(levels) / len(levels) if levels else blood_sugar_default,
        meal_count=meal_count,
        health_score=(
            sum(meal.health_score for meal in todays) / meal_count if meal_count else 0
        ),
    )


def _valid_levels(points: object) -> list[float]:
    """Return glucose levels from well-formed points, skipping anything else."""
    if not isinstance(points, list):
        return []
    levels = []
    for point in points:
        if not isinstance(point, dict):
            continue
        level = point.get("level")
        if isinstance(level, bool) or not isinstance(level, int | float):
            continue
        if not math.isfinite(level):
            continue
        levels.append(float(level))
    return levels
