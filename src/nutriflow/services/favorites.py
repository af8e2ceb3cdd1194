"""Services for the user's favorite foods."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from nutriflow.domain.errors import NotFound
from nutriflow.domain.favorites import FavoriteItem
from nutriflow.domain.meals import validate_meal


class FavoriteRepository(Protocol):
    """Persistence interface for favorites."""

    def create_favorite(
        self, user_id: str, payload: dict[str, object]
    ) -> FavoriteItem:
        """Create a favorite and return it."""

    def list_favorites(self, user_id: str) -> list[FavoriteItem]:
        """Return favorites in creation order."""

    def delete_favorite(self, user_id: str, favorite_id: str) -> bool:
        """Delete a favorite and report whether it existed."""


@dataclass
class FavoritesService:
    """Application service for favorites."""

    repository: FavoriteRepository

    def list_favorites(self, user_id: str) -> list[FavoriteItem]:
        """Return the user's favorites."""
        return self.repository.list_favorites(user_id)

    def add_favorite(
        self, user_id: str, candidate: Mapping[str, object]
    ) -> FavoriteItem:
        """Validate nutrition values and save them as a favorite."""
        fields = validate_meal(candidate)
        return self.repository.create_favorite(
            user_id,
            {
                "name": fields.name,
                "calories": fields.calories,
                "protein": fields.protein,
                "carbs": fields.carbs,
                "fat": fields.fat,
            },
        )

    def remove_favorite(self, user_id: str, favorite_id: str) -> None:
        """Remove a favorite."""
        if not self.repository.delete_favorite(user_id, favorite_id):
            raise NotFound("favorite", favorite_id)

    def find_by_name(self, user_id: str, name: str) -> FavoriteItem | None:
        """Return the favorite with exactly this name, if any."""
        for favorite in self.repository.list_favorites(user_id):
            if favorite.name == name:
                return favorite
        return None

    def is_favorite(self, user_id: str, name: str) -> bool:
        """Return True when a favorite with this name exists."""
        return self.find_by_name(user_id, name) is not None

    def toggle_favorite(
        self, user_id: str, candidate: Mapping[str, object]
    ) -> FavoriteItem | None:
        """Add the item, or remove it when already favorited.

        Returns the new favorite, or None when one was removed.
        """
        existing = self.find_by_name(user_id, str(candidate.get("name") or "").strip())
        if existing is not None:
            self.remove_favorite(user_id, existing.id)
            return None
        return self.add_favorite(user_id, candidate)
