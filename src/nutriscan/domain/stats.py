"""Domain models for dashboard statistics."""

from dataclasses import dataclass

WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class DailyStats:
    """Today's totals for the dashboard."""

    calories: int
    calorie_goal: int
    blood_sugar_avg: float
    meal_count: int
    health_score: float


@dataclass(frozen=True)
class WeeklyDatum:
    """Totals for one weekday bucket."""

    day: str
    calories: int
    health_score: float
