"""HTTP endpoints for meals, stats, goals, profile, favorites and analysis."""

from __future__ import annotations

import base64
import binascii
from dataclasses import asdict
from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status

from nutriflow.api.models import (  # noqa: TC001
    FavoriteRequest,
    GoalsInput,
    ImageAnalysisRequest,
    MealUpdateRequest,
    MoveMealRequest,
    NewMealRequest,
    ProfileUpdateRequest,
    RecalculateRequest,
    SignInRequest,
    SignUpRequest,
    TextAnalysisRequest,
)
from nutriflow.domain.analysis import AIAnalysisResult
from nutriflow.domain.errors import ValidationError
from nutriflow.domain.meals import Meal, format_time
from nutriflow.services.auth import AuthSession

if TYPE_CHECKING:
    from nutriflow.containers import AppContainer

router = APIRouter()


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def current_user_id(
    request: Request, authorization: str | None = Header(default=None)
) -> str:
    """Resolve the bearer token to the signed-in user's id."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    return _container(request).auth_service.authenticate(token).id


@router.post("/auth/sign-up", status_code=status.HTTP_201_CREATED)
def sign_up(body: SignUpRequest, request: Request) -> dict[str, object]:
    """Register a user."""
    session = _container(request).auth_service.sign_up(
        body.email, body.password, body.name, body.calories_goal
    )
    if session is None:
        return {"status": "confirmation_required"}
    return {"status": "signed_in", **_session_json(session)}


@router.post("/auth/sign-in")
def sign_in(body: SignInRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for tokens."""
    session = _container(request).auth_service.sign_in(body.email, body.password)
    return _session_json(session)


@router.get("/meals")
def list_meals(
    request: Request,
    day: date | None = None,
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Return the user's meals, optionally for one day."""
    meals = _container(request).meal_service.list_meals(user_id, day)
    return {"meals": [_meal_json(meal) for meal in meals]}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
def add_meal(
    body: NewMealRequest, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Log a meal on the given day."""
    candidate = body.model_dump(exclude={"day"}, exclude_none=True)
    meal = _container(request).meal_service.add_meal(user_id, body.day, candidate)
    return _meal_json(meal)


@router.patch("/meals/{meal_id}")
def update_meal(
    meal_id: str,
    body: MealUpdateRequest,
    request: Request,
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Edit a meal."""
    changes = body.model_dump(exclude_unset=True)
    meal = _container(request).meal_service.update_meal(user_id, meal_id, changes)
    return _meal_json(meal)


@router.post("/meals/{meal_id}/move")
def move_meal(
    meal_id: str,
    body: MoveMealRequest,
    request: Request,
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Move a meal to another category."""
    meal = _container(request).meal_service.move_meal(user_id, meal_id, body.category)
    return _meal_json(meal)


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: str, request: Request, user_id: str = Depends(current_user_id)
) -> None:
    """Delete a meal."""
    _container(request).meal_service.delete_meal(user_id, meal_id)


@router.get("/stats/day")
def day_stats(
    day: date, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return totals, per-category totals, goal progress and macro split."""
    container = _container(request)
    goals = container.profile_service.get_goals(user_id)
    overview = container.stats_service.get_day_overview(user_id, day, goals)
    return {
        "day": day.isoformat(),
        "totals": asdict(overview.totals),
        "by_category": {
            category.value: asdict(value)
            for category, value in overview.by_category.items()
        },
        "progress": asdict(overview.progress),
        "macro_progress": {
            macro: asdict(value) for macro, value in overview.macro_progress.items()
        },
        "macros": asdict(overview.macros),
        "meal_count": overview.meal_count,
    }


@router.get("/stats/week")
def week_stats(
    anchor: date, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return the seven days ending on anchor and the adherence summary."""
    container = _container(request)
    goals = container.profile_service.get_goals(user_id)
    overview = container.stats_service.get_week(user_id, anchor, goals)
    return {
        "days": [
            {"day": entry.day.isoformat(), "calories": entry.calories}
            for entry in overview.days
        ],
        "summary": asdict(overview.summary),
        "goal": goals.calories,
    }


@router.get("/goals")
def get_goals(
    request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return daily goals."""
    return asdict(_container(request).profile_service.get_goals(user_id))


@router.put("/goals")
def update_goals(
    body: GoalsInput, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Save daily goals."""
    goals = _container(request).profile_service.update_goals(
        user_id, body.model_dump(exclude_none=True)
    )
    return asdict(goals)


@router.get("/profile")
def get_profile(
    request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's profile."""
    return asdict(_container(request).profile_service.get_profile(user_id))


@router.patch("/profile")
def update_profile(
    body: ProfileUpdateRequest,
    request: Request,
    user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Save profile changes."""
    changes = body.model_dump(exclude_unset=True)
    profile = _container(request).profile_service.update_profile(user_id, changes)
    return asdict(profile)


@router.get("/favorites")
def list_favorites(
    request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Return favorites."""
    favorites = _container(request).favorites_service.list_favorites(user_id)
    return {"favorites": [asdict(item) for item in favorites]}


@router.post("/favorites", status_code=status.HTTP_201_CREATED)
def add_favorite(
    body: FavoriteRequest, request: Request, user_id: str = Depends(current_user_id)
) -> dict[str, object]:
    """Save a favorite."""
    favorite = _container(request).favorites_service.add_favorite(
        user_id, body.model_dump(exclude_none=True)
    )
    return asdict(favorite)


@router.delete("/favorites/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    favorite_id: str, request: Request, user_id: str = Depends(current_user_id)
) -> None:
    """Remove a favorite."""
    _container(request).favorites_service.remove_favorite(user_id, favorite_id)


@router.get("/library")
def search_library(
    request: Request, q: str | None = None, limit: int = 10
) -> dict[str, object]:
    """Search the built-in food catalog."""
    foods = _container(request).library_service.search(q, limit=limit)
    return {"foods": [asdict(food) for food in foods]}


@router.post("/analysis/text")
async def analyze_text(
    body: TextAnalysisRequest,
    request: Request,
    _user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Estimate a meal from a description."""
    result = await _container(request).analysis_service.analyze_text(body.description)
    return asdict(result)


@router.post("/analysis/image")
async def analyze_image(
    body: ImageAnalysisRequest,
    request: Request,
    _user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Estimate a meal from a compressed photo."""
    try:
        image_bytes = base64.b64decode(body.image_base64, validate=True)
    except binascii.Error as exc:
        raise ValidationError("image", "image must be base64 encoded") from exc
    result = await _container(request).analysis_service.analyze_image(
        image_bytes, body.mime_type
    )
    return asdict(result)


@router.post("/analysis/recalculate")
async def recalculate(
    body: RecalculateRequest,
    request: Request,
    _user_id: str = Depends(current_user_id),
) -> dict[str, object]:
    """Refresh macros for an edited ingredient list."""
    draft = AIAnalysisResult(**body.draft.model_dump())
    result = await _container(request).analysis_service.recalculate(draft, body.items)
    return asdict(result)


def _meal_json(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fat": meal.fat,
        "time": format_time(meal.time),
        "category": meal.category.value,
        "day": meal.day.isoformat(),
        "image_url": meal.image_url,
    }


def _session_json(session: AuthSession) -> dict[str, object]:
    return {
        "user_id": session.user.id,
        "email": session.user.email,
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
    }
