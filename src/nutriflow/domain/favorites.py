"""Domain models for favorite foods."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FavoriteItem:
    """A reusable nutrition template saved by the user."""

    id: str
    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
