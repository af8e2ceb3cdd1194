"""Daily nutrition goals."""

from collections.abc import Mapping
from dataclasses import dataclass

from nutriflow.domain.validation import bounded_int


@dataclass(frozen=True)
class DailyGoals:
    """A user's daily calorie and macro targets."""

    calories: int
    protein: int
    carbs: int
    fat: int


DEFAULT_GOALS = DailyGoals(calories=2000, protein=150, carbs=200, fat=65)


def validate_goals(
    candidate: Mapping[str, object], base: DailyGoals = DEFAULT_GOALS
) -> DailyGoals:
    """Validate goal input, keeping values from base for absent fields."""
    return DailyGoals(
        calories=_field(candidate, "calories", base.calories),
        protein=_field(candidate, "protein", base.protein),
        carbs=_field(candidate, "carbs", base.carbs),
        fat=_field(candidate, "fat", base.fat),
    )


def _field(candidate: Mapping[str, object], name: str, fallback: int) -> int:
    value = bounded_int(candidate, name, None, default=None)
    return fallback if value is None else value
