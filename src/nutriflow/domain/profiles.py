"""Domain models for user profiles."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from nutriflow.domain.goals import DEFAULT_GOALS, DailyGoals


class Gender(StrEnum):
    """Self-reported gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Typical weekly activity."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    ATHLETE = "athlete"


class GoalType(StrEnum):
    """Body-weight objective."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """User profile with optional biometrics and nutrition goals."""

    user_id: str
    name: str
    weight: float | None = None
    height: float | None = None
    birth_date: date | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal_type: GoalType | None = None
    target_weight: float | None = None
    avatar_url: str | None = None
    goals: DailyGoals = field(default=DEFAULT_GOALS)
