"""Supabase repository for favorite foods."""

from dataclasses import dataclass

from supabase import Client

from nutriflow.domain.favorites import FavoriteItem
from nutriflow.services.favorites import FavoriteRepository


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed favorites."""

    client: Client

    def create_favorite(
        self, user_id: str, payload: dict[str, object]
    ) -> FavoriteItem:
        """Create a favorite row and return it."""
        response = (
            self.client.table("favorites")
            .insert({"user_id": user_id, **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create favorite")
        return _parse_favorite(response.data[0])

    def list_favorites(self, user_id: str) -> list[FavoriteItem]:
        """Return favorites in creation order."""
        response = (
            self.client.table("favorites")
            .select("id, name, calories, protein, carbs, fat")
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def delete_favorite(self, user_id: str, favorite_id: str) -> bool:
        """Delete a favorite row."""
        response = (
            self.client.table("favorites")
            .delete()
            .eq("user_id", user_id)
            .eq("id", favorite_id)
            .execute()
        )
        return bool(response.data)


def _parse_favorite(row: dict[str, object]) -> FavoriteItem:
    return FavoriteItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein=int(row.get("protein") or 0),
        carbs=int(row.get("carbs") or 0),
        fat=int(row.get("fat") or 0),
    )
