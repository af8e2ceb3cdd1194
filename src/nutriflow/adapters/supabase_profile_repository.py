"""Supabase repository for profiles and daily goals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum

from supabase import Client

from nutriflow.domain.goals import DEFAULT_GOALS, DailyGoals
from nutriflow.domain.profiles import ActivityLevel, Gender, GoalType, Profile
from nutriflow.services.profiles import ProfileRepository

_GOAL_COLUMNS = "calories_goal, protein_goal, carbs_goal, fat_goal"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation over the profiles table."""

    client: Client

    def create_profile(self, user_id: str, name: str, goals: DailyGoals) -> Profile:
        """Upsert the profile row created for a new user."""
        response = (
            self.client.table("profiles")
            .upsert(
                {
                    "id": user_id,
                    "name": name,
                    **_goal_columns(goals),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return _parse_profile(response.data[0])

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the profile row for a user."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Update profile columns and return the stored row."""
        payload: dict[str, object] = {}
        for key, value in changes.items():
            if isinstance(value, DailyGoals):
                payload.update(_goal_columns(value))
            elif isinstance(value, Enum):
                payload[key] = value.value
            elif isinstance(value, date):
                payload[key] = value.isoformat()
            else:
                payload[key] = value
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("profiles").update(payload).eq("id", user_id).execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def get_goals(self, user_id: str) -> DailyGoals | None:
        """Return stored goals, or None when no profile row exists."""
        response = (
            self.client.table("profiles")
            .select(_GOAL_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goals(response.data[0])

    def set_goals(self, user_id: str, goals: DailyGoals) -> bool:
        """Update goal columns. Return False when no profile row matched."""
        response = (
            self.client.table("profiles")
            .update(
                {
                    **_goal_columns(goals),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", user_id)
            .execute()
        )
        return bool(response.data)


def _goal_columns(goals: DailyGoals) -> dict[str, int]:
    return {
        "calories_goal": goals.calories,
        "protein_goal": goals.protein,
        "carbs_goal": goals.carbs,
        "fat_goal": goals.fat,
    }


def _parse_goals(row: dict[str, object]) -> DailyGoals:
    def pick(column: str, fallback: int) -> int:
        value = row.get(column)
        return fallback if value is None else int(value)

    return DailyGoals(
        calories=pick("calories_goal", DEFAULT_GOALS.calories),
        protein=pick("protein_goal", DEFAULT_GOALS.protein),
        carbs=pick("carbs_goal", DEFAULT_GOALS.carbs),
        fat=pick("fat_goal", DEFAULT_GOALS.fat),
    )


def _optional_float(value: object) -> float | None:
    return float(value) if isinstance(value, int | float) else None


def _parse_profile(row: dict[str, object]) -> Profile:
    birth_raw = row.get("birth_date")
    return Profile(
        user_id=str(row["id"]),
        name=str(row.get("name") or ""),
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        birth_date=(
            date.fromisoformat(birth_raw)
            if isinstance(birth_raw, str) and birth_raw
            else None
        ),
        gender=Gender(row["gender"]) if row.get("gender") else None,
        activity_level=(
            ActivityLevel(row["activity_level"]) if row.get("activity_level") else None
        ),
        goal_type=GoalType(row["goal_type"]) if row.get("goal_type") else None,
        target_weight=_optional_float(row.get("target_weight")),
        avatar_url=row.get("avatar_url") or None,
        goals=_parse_goals(row),
    )
