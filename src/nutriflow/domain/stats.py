"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


@dataclass(frozen=True)
class NutritionTotals:
    """Summed calories and macros."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0


ZERO_TOTALS = NutritionTotals()


@dataclass(frozen=True)
class DailyCalories:
    """Calorie total for one calendar day."""

    day: date
    calories: int


@dataclass(frozen=True)
class WeeklySummary:
    """Goal adherence over a run of days."""

    average_calories: int
    days_on_goal: int
    current_streak: int


@dataclass(frozen=True)
class MacroDistribution:
    """Share of each macro by grams, in whole percent."""

    protein_pct: int
    carbs_pct: int
    fat_pct: int
    has_data: bool = True


NO_MACRO_DATA = MacroDistribution(protein_pct=0, carbs_pct=0, fat_pct=0, has_data=False)


class ProgressStatus(StrEnum):
    """Where consumption sits relative to the calorie goal."""

    ON_TRACK = "on_track"
    NEAR_LIMIT = "near_limit"
    OVER = "over"


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a consumed amount against its daily goal."""

    consumed: int
    goal: int
    remaining: int
    percent_of_goal: int
    ring_percent: int
    is_over: bool
    status: ProgressStatus
