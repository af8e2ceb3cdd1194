"""Profile and daily goal management."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Protocol

from nutriflow.domain.errors import NotFound, ValidationError
from nutriflow.domain.goals import DEFAULT_GOALS, DailyGoals, validate_goals
from nutriflow.domain.profiles import ActivityLevel, Gender, GoalType, Profile
from nutriflow.domain.validation import is_blank, parse_float


class ProfileRepository(Protocol):
    """Persistence interface for profiles and goals."""

    def create_profile(self, user_id: str, name: str, goals: DailyGoals) -> Profile:
        """Create or replace the profile row for a new user."""

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the user's profile, if present."""

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Apply profile changes and return the result, or None when missing."""

    def get_goals(self, user_id: str) -> DailyGoals | None:
        """Return stored goals, or None when the user has none."""

    def set_goals(self, user_id: str, goals: DailyGoals) -> bool:
        """Persist daily goals. Return False when the profile does not exist."""


_MEASUREMENTS = ("weight", "height", "target_weight")
_CHOICES: dict[str, type[StrEnum]] = {
    "gender": Gender,
    "activity_level": ActivityLevel,
    "goal_type": GoalType,
}


@dataclass
class ProfileService:
    """Application service for profile data and daily goals."""

    repository: ProfileRepository

    def create_profile(self, user_id: str, name: str, calories_goal: int) -> Profile:
        """Create a profile at sign-up with an initial calorie goal."""
        goals = validate_goals({"calories": calories_goal})
        return self.repository.create_profile(user_id, name.strip(), goals)

    def get_profile(self, user_id: str) -> Profile:
        """Return the user's profile."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFound("profile", user_id)
        return profile

    def update_profile(self, user_id: str, changes: Mapping[str, object]) -> Profile:
        """Validate and save a partial profile update."""
        payload = _validate_profile_changes(changes)
        if "goals" in changes and isinstance(changes["goals"], Mapping):
            payload["goals"] = validate_goals(
                changes["goals"], base=self.get_goals(user_id)
            )
        updated = self.repository.update_profile(user_id, payload)
        if updated is None:
            raise NotFound("profile", user_id)
        return updated

    def get_goals(self, user_id: str) -> DailyGoals:
        """Return the user's goals, or the defaults when never customized."""
        return self.repository.get_goals(user_id) or DEFAULT_GOALS

    def update_goals(self, user_id: str, candidate: Mapping[str, object]) -> DailyGoals:
        """Validate and save daily goals."""
        goals = validate_goals(candidate, base=self.get_goals(user_id))
        if not self.repository.set_goals(user_id, goals):
            raise NotFound("profile", user_id)
        return goals


def _validate_profile_changes(changes: Mapping[str, object]) -> dict[str, object]:
    payload: dict[str, object] = {}
    if "name" in changes:
        if is_blank(changes["name"]):
            raise ValidationError("name", "name must not be empty")
        payload["name"] = str(changes["name"]).strip()
    for key in _MEASUREMENTS:
        if key in changes:
            payload[key] = parse_float(key, changes[key])
    for key, choice in _CHOICES.items():
        if key in changes:
            payload[key] = _parse_choice(key, choice, changes[key])
    if "birth_date" in changes:
        payload["birth_date"] = _parse_birth_date(changes["birth_date"])
    if "avatar_url" in changes:
        avatar = changes["avatar_url"]
        payload["avatar_url"] = None if is_blank(avatar) else str(avatar)
    return payload


def _parse_choice(key: str, choice: type[StrEnum], value: object) -> StrEnum | None:
    if is_blank(value):
        return None
    try:
        return choice(str(value))
    except ValueError as exc:
        raise ValidationError(key, f"unknown {key}: {value}") from exc


def _parse_birth_date(value: object) -> date | None:
    if is_blank(value):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError("birth_date", "birth_date must be YYYY-MM-DD") from exc
