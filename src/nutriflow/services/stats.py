"""Nutrition statistics derived from logged meals."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from nutriflow.domain.goals import DailyGoals
from nutriflow.domain.meals import Meal, MealCategory
from nutriflow.domain.stats import (
    NO_MACRO_DATA,
    ZERO_TOTALS,
    DailyCalories,
    GoalProgress,
    MacroDistribution,
    NutritionTotals,
    ProgressStatus,
    WeeklySummary,
)
from nutriflow.domain.validation import round_half_up

WEEK_DAYS = 7
NEAR_LIMIT_PERCENT = 85


class StatsRepository(Protocol):
    """Read access to meals for statistics."""

    def list_meals(self, user_id: str, day: date | None = None) -> list[Meal]:
        """Return meals, optionally for a single day."""

    def list_meals_between(self, user_id: str, start: date, end: date) -> list[Meal]:
        """Return meals with start <= day <= end."""


def totals_for_date(meals: Iterable[Meal], day: date) -> NutritionTotals:
    """Sum calories and macros of the meals logged on day."""
    return _sum(meal for meal in meals if meal.day == day)


def totals_by_category(
    meals: Iterable[Meal], day: date
) -> dict[MealCategory, NutritionTotals]:
    """Sum the day's meals per category; empty categories get zero totals."""
    grouped: dict[MealCategory, list[Meal]] = {
        category: [] for category in MealCategory
    }
    for meal in meals:
        if meal.day == day:
            grouped[meal.category].append(meal)
    return {category: _sum(entries) for category, entries in grouped.items()}


def last_7_day_totals(meals: Iterable[Meal], anchor: date) -> list[DailyCalories]:
    """Return calorie totals for the week ending on anchor, oldest first."""
    start = anchor - timedelta(days=WEEK_DAYS - 1)
    by_day: dict[date, int] = {}
    for meal in meals:
        if start <= meal.day <= anchor:
            by_day[meal.day] = by_day.get(meal.day, 0) + meal.calories
    return [
        DailyCalories(day=day, calories=by_day.get(day, 0))
        for day in (start + timedelta(days=offset) for offset in range(WEEK_DAYS))
    ]


def weekly_summary(
    daily_totals: Sequence[DailyCalories], goals: DailyGoals
) -> WeeklySummary:
    """Summarize goal adherence over a run of daily calorie totals."""
    ordered = sorted(daily_totals, key=lambda entry: entry.day)
    logged = [entry.calories for entry in ordered if entry.calories > 0]
    average = round_half_up(sum(logged) / len(logged)) if logged else 0

    on_goal = [is_on_goal(entry.calories, goals.calories) for entry in ordered]
    streak = 0
    for hit in reversed(on_goal):
        if not hit:
            break
        streak += 1

    return WeeklySummary(
        average_calories=average,
        days_on_goal=sum(on_goal),
        current_streak=streak,
    )


def is_on_goal(calories: int, goal: int) -> bool:
    """Return True when a logged day lands within 80-120% of the goal."""
    # Integer form of 0.8 * goal <= calories <= 1.2 * goal.
    return calories > 0 and goal * 8 <= calories * 10 <= goal * 12


def macro_distribution(protein: int, carbs: int, fat: int) -> MacroDistribution:
    """Return each macro's share of total grams."""
    total = protein + carbs + fat
    if total <= 0:
        return NO_MACRO_DATA
    return MacroDistribution(
        protein_pct=round_half_up(protein * 100 / total),
        carbs_pct=round_half_up(carbs * 100 / total),
        fat_pct=round_half_up(fat * 100 / total),
    )


def goal_progress(consumed: int, goal: int) -> GoalProgress:
    """Return progress of a consumed amount against its daily goal."""
    if goal > 0:
        percent = round_half_up(consumed * 100 / goal)
    else:
        percent = 100 if consumed > 0 else 0
    is_over = consumed > goal
    if is_over:
        status = ProgressStatus.OVER
    elif consumed * 100 > goal * NEAR_LIMIT_PERCENT:
        status = ProgressStatus.NEAR_LIMIT
    else:
        status = ProgressStatus.ON_TRACK
    return GoalProgress(
        consumed=consumed,
        goal=goal,
        remaining=max(goal - consumed, 0),
        percent_of_goal=percent,
        ring_percent=min(percent, 100),
        is_over=is_over,
        status=status,
    )


def macro_progress(
    totals: NutritionTotals, goals: DailyGoals
) -> dict[str, GoalProgress]:
    """Return protein, carbs and fat progress against their gram goals."""
    return {
        "protein": goal_progress(totals.protein, goals.protein),
        "carbs": goal_progress(totals.carbs, goals.carbs),
        "fat": goal_progress(totals.fat, goals.fat),
    }


def _sum(meals: Iterable[Meal]) -> NutritionTotals:
    total = ZERO_TOTALS
    for meal in meals:
        total = NutritionTotals(
            calories=total.calories + meal.calories,
            protein=total.protein + meal.protein,
            carbs=total.carbs + meal.carbs,
            fat=total.fat + meal.fat,
        )
    return total


@dataclass(frozen=True)
class DayOverview:
    """Everything the daily dashboard shows for one date."""

    totals: NutritionTotals
    by_category: dict[MealCategory, NutritionTotals]
    progress: GoalProgress
    macro_progress: dict[str, GoalProgress]
    macros: MacroDistribution
    meal_count: int


@dataclass(frozen=True)
class WeekOverview:
    """Seven-day history with its adherence summary."""

    days: list[DailyCalories]
    summary: WeeklySummary


@dataclass
class StatsService:
    """Service that loads meals and computes statistics."""

    repository: StatsRepository

    def get_day(self, user_id: str, day: date) -> NutritionTotals:
        """Return totals for a day."""
        return totals_for_date(self.repository.list_meals(user_id, day), day)

    def get_day_overview(
        self, user_id: str, day: date, goals: DailyGoals
    ) -> DayOverview:
        """Return totals, per-category sums, goal progress and macro split."""
        meals = self.repository.list_meals(user_id, day)
        totals = totals_for_date(meals, day)
        return DayOverview(
            totals=totals,
            by_category=totals_by_category(meals, day),
            progress=goal_progress(totals.calories, goals.calories),
            macro_progress=macro_progress(totals, goals),
            macros=macro_distribution(totals.protein, totals.carbs, totals.fat),
            meal_count=len([meal for meal in meals if meal.day == day]),
        )

    def get_week(self, user_id: str, anchor: date, goals: DailyGoals) -> WeekOverview:
        """Return the seven days ending on anchor and their summary."""
        start = anchor - timedelta(days=WEEK_DAYS - 1)
        meals = self.repository.list_meals_between(user_id, start, anchor)
        days = last_7_day_totals(meals, anchor)
        return WeekOverview(days=days, summary=weekly_summary(days, goals))
