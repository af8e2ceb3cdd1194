"""Request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

FormNumber = int | float | str | None


class SignUpRequest(BaseModel):
    """Registration form."""

    email: str
    password: str
    name: str
    calories_goal: int = Field(default=2000, ge=0)


class SignInRequest(BaseModel):
    """Credentials form."""

    email: str
    password: str


class MealInput(BaseModel):
    """Meal form fields; values are validated by the domain layer."""

    name: str | None = None
    calories: FormNumber = None
    protein: FormNumber = None
    carbs: FormNumber = None
    fat: FormNumber = None
    time: str | None = None
    category: str | None = None
    image_url: str | None = None


class NewMealRequest(MealInput):
    """Meal to log on a given day."""

    day: date


class MealUpdateRequest(MealInput):
    """Partial meal edit."""

    day: date | None = None


class MoveMealRequest(BaseModel):
    """Target meal slot."""

    category: str


class GoalsInput(BaseModel):
    """Daily goal form."""

    calories: FormNumber = None
    protein: FormNumber = None
    carbs: FormNumber = None
    fat: FormNumber = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile save."""

    name: str | None = None
    weight: FormNumber = None
    height: FormNumber = None
    birth_date: str | None = None
    gender: str | None = None
    activity_level: str | None = None
    goal_type: str | None = None
    target_weight: FormNumber = None
    avatar_url: str | None = None
    goals: GoalsInput | None = None


class FavoriteRequest(BaseModel):
    """Favorite food template."""

    name: str | None = None
    calories: FormNumber = None
    protein: FormNumber = None
    carbs: FormNumber = None
    fat: FormNumber = None


class TextAnalysisRequest(BaseModel):
    """Free-text meal description."""

    description: str


class ImageAnalysisRequest(BaseModel):
    """Compressed photo encoded as base64."""

    image_base64: str
    mime_type: str | None = None


class AnalysisDraft(BaseModel):
    """Draft returned by a previous analysis, as edited by the user."""

    name: object = None
    items: list[object] = Field(default_factory=list)
    calories: object = None
    protein: object = None
    carbs: object = None
    fat: object = None
    portion: object = None


class RecalculateRequest(BaseModel):
    """Edited ingredients to re-estimate."""

    draft: AnalysisDraft
    items: list[str]
