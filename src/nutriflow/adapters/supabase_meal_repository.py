"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from supabase import Client

from nutriflow.domain.meals import (
    Meal,
    MealCategory,
    MealFields,
    format_time,
    parse_time,
)
from nutriflow.services.meals import MealRepository

_COLUMNS = (
    "id, name, calories, protein, carbs, fat, time, category, date_str, image_url"
)
_COLUMN_NAMES = {"day": "date_str"}


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, user_id: str, day: date, fields: MealFields) -> Meal:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": user_id,
                    "name": fields.name,
                    "calories": fields.calories,
                    "protein": fields.protein,
                    "carbs": fields.carbs,
                    "fat": fields.fat,
                    "time": format_time(fields.time) if fields.time else None,
                    "category": fields.category.value,
                    "date_str": day.isoformat(),
                    "image_url": fields.image_url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: str, day: date | None = None) -> list[Meal]:
        """Return meals in creation order."""
        query = self.client.table("meals").select(_COLUMNS).eq("user_id", user_id)
        if day is not None:
            query = query.eq("date_str", day.isoformat())
        response = query.order("created_at", desc=False).execute()
        return [_parse_meal(row) for row in response.data or []]

    def list_meals_between(self, user_id: str, start: date, end: date) -> list[Meal]:
        """Return meals for an inclusive date range."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .gte("date_str", start.isoformat())
            .lte("date_str", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, user_id: str, meal_id: str) -> Meal | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def update_meal(
        self, user_id: str, meal_id: str, changes: dict[str, object]
    ) -> Meal | None:
        """Update meal columns and return the stored row."""
        payload = {
            _COLUMN_NAMES.get(key, key): _to_column(value)
            for key, value in changes.items()
        }
        response = (
            self.client.table("meals")
            .update(payload)
            .eq("user_id", user_id)
            .eq("id", meal_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, user_id: str, meal_id: str) -> bool:
        """Delete a meal row."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("user_id", user_id)
            .eq("id", meal_id)
            .execute()
        )
        return bool(response.data)


def _to_column(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, time):
        return format_time(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein=int(row.get("protein") or 0),
        carbs=int(row.get("carbs") or 0),
        fat=int(row.get("fat") or 0),
        time=parse_time(row.get("time")) or time(0, 0),
        category=MealCategory(str(row.get("category") or MealCategory.BREAKFAST)),
        day=date.fromisoformat(str(row["date_str"])),
        image_url=row.get("image_url") or None,
    )
