"""Domain models and validation for logged meals."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, time
from enum import StrEnum

from nutriflow.domain.errors import MissingField, ValidationError
from nutriflow.domain.validation import bounded_int, is_blank

MAX_CALORIES = 9999
MAX_MACRO_GRAMS = 999


class MealCategory(StrEnum):
    """Meal slot a logged entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"


@dataclass(frozen=True)
class MealFields:
    """Validated meal content without identity or date."""

    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    time: time | None
    category: MealCategory
    image_url: str | None = None


@dataclass(frozen=True)
class Meal:
    """A single logged food entry."""

    id: str
    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    time: time
    category: MealCategory
    day: date
    image_url: str | None = None

    def as_candidate(self) -> dict[str, object]:
        """Return the editable fields in the shape accepted by validate_meal."""
        return {
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "time": self.time,
            "category": self.category,
            "image_url": self.image_url,
        }


def validate_meal(candidate: Mapping[str, object]) -> MealFields:
    """Validate raw meal input and normalize optional fields.

    Name and calories are required. Protein, carbs and fat default to 0 when
    absent. Category defaults to breakfast and time stays None when absent so
    the caller can stamp the current time.
    """
    raw_name = candidate.get("name")
    if is_blank(raw_name):
        raise MissingField("name")
    calories = bounded_int(candidate, "calories", MAX_CALORIES, default=None)
    if calories is None:
        raise MissingField("calories")
    image_url = candidate.get("image_url")
    return MealFields(
        name=str(raw_name).strip(),
        calories=calories,
        protein=bounded_int(candidate, "protein", MAX_MACRO_GRAMS) or 0,
        carbs=bounded_int(candidate, "carbs", MAX_MACRO_GRAMS) or 0,
        fat=bounded_int(candidate, "fat", MAX_MACRO_GRAMS) or 0,
        time=parse_time(candidate.get("time")),
        category=parse_category(candidate.get("category")),
        image_url=None if is_blank(image_url) else str(image_url),
    )


def parse_category(value: object) -> MealCategory:
    """Parse a category name, defaulting to breakfast."""
    if is_blank(value):
        return MealCategory.BREAKFAST
    if isinstance(value, MealCategory):
        return value
    try:
        return MealCategory(str(value).strip().lower())
    except ValueError as exc:
        raise ValidationError("category", f"unknown category: {value}") from exc


def parse_time(value: object) -> time | None:
    """Parse an HH:MM time of day."""
    if is_blank(value):
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise ValidationError("time", "time must be HH:MM")
    try:
        hour_text, minute_text = value.strip().split(":")[:2]
        return time(hour=int(hour_text), minute=int(minute_text))
    except ValueError as exc:
        raise ValidationError("time", "time must be HH:MM") from exc


def format_time(value: time) -> str:
    """Format a time of day as HH:MM."""
    return value.strftime("%H:%M")
