"""Meal logging service."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Protocol

from nutriflow.domain.errors import MissingField, NotFound, ValidationError
from nutriflow.domain.favorites import FavoriteItem
from nutriflow.domain.library import LibraryFood
from nutriflow.domain.meals import (
    Meal,
    MealCategory,
    MealFields,
    parse_category,
    validate_meal,
)
from nutriflow.domain.validation import is_blank

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals, scoped by user."""

    def create_meal(self, user_id: str, day: date, fields: MealFields) -> Meal:
        """Store a meal and return it with its assigned id."""

    def list_meals(self, user_id: str, day: date | None = None) -> list[Meal]:
        """Return meals in creation order, optionally for a single day."""

    def list_meals_between(self, user_id: str, start: date, end: date) -> list[Meal]:
        """Return meals with start <= day <= end."""

    def get_meal(self, user_id: str, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""

    def update_meal(
        self, user_id: str, meal_id: str, changes: dict[str, object]
    ) -> Meal | None:
        """Apply changes to a meal and return it, or None when missing."""

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal and report whether it existed."""


def _current_time() -> time:
    return datetime.now().time().replace(second=0, microsecond=0)


@dataclass
class MealService:
    """Application service for creating and editing meals."""

    repository: MealRepository
    clock: Callable[[], time] = field(default=_current_time)

    def add_meal(
        self, user_id: str, day: date, candidate: Mapping[str, object]
    ) -> Meal:
        """Validate a candidate and log it on the given day."""
        fields = validate_meal(candidate)
        if fields.time is None:
            fields = replace(fields, time=self.clock())
        meal = self.repository.create_meal(user_id, day, fields)
        logger.info("Logged meal %s for %s", meal.id, day.isoformat())
        return meal

    def list_meals(self, user_id: str, day: date | None = None) -> list[Meal]:
        """Return the user's meals, optionally for one day."""
        return self.repository.list_meals(user_id, day)

    def update_meal(
        self, user_id: str, meal_id: str, changes: Mapping[str, object]
    ) -> Meal:
        """Edit any meal field except its id."""
        current = self._require(user_id, meal_id)
        merged = {**current.as_candidate(), **changes}
        fields = validate_meal(merged)
        payload: dict[str, object] = {
            "name": fields.name,
            "calories": fields.calories,
            "protein": fields.protein,
            "carbs": fields.carbs,
            "fat": fields.fat,
            "time": fields.time or current.time,
            "category": fields.category,
            "image_url": fields.image_url,
        }
        if "day" in changes and changes["day"] is not None:
            payload["day"] = _parse_day(changes["day"])
        return self._apply(user_id, meal_id, payload)

    def move_meal(self, user_id: str, meal_id: str, category: object) -> Meal:
        """Move a meal to another meal slot."""
        if is_blank(category):
            raise MissingField("category")
        target: MealCategory = parse_category(category)
        return self._apply(user_id, meal_id, {"category": target})

    def delete_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a meal."""
        if not self.repository.delete_meal(user_id, meal_id):
            raise NotFound("meal", meal_id)
        logger.info("Deleted meal %s", meal_id)

    def _require(self, user_id: str, meal_id: str) -> Meal:
        meal = self.repository.get_meal(user_id, meal_id)
        if meal is None:
            raise NotFound("meal", meal_id)
        return meal

    def _apply(self, user_id: str, meal_id: str, payload: dict[str, object]) -> Meal:
        updated = self.repository.update_meal(user_id, meal_id, payload)
        if updated is None:
            raise NotFound("meal", meal_id)
        return updated


def quick_fill(
    template: FavoriteItem | LibraryFood, category: MealCategory | None = None
) -> dict[str, object]:
    """Return meal form input pre-filled from a favorite or library food."""
    candidate: dict[str, object] = {
        "name": template.name,
        "calories": template.calories,
        "protein": template.protein,
        "carbs": template.carbs,
        "fat": template.fat,
    }
    if category is not None:
        candidate["category"] = category
    return candidate


def _parse_day(value: object) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError("day", "day must be YYYY-MM-DD") from exc
