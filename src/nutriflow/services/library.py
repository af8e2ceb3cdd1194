"""Search over the built-in food library."""

import unicodedata
from dataclasses import dataclass, field

from nutriflow.domain.library import FOOD_LIBRARY, LibraryFood


@dataclass
class LibraryService:
    """Service for browsing the food catalog."""

    foods: tuple[LibraryFood, ...] = field(default=FOOD_LIBRARY)

    def search(self, query: str | None, limit: int = 10) -> list[LibraryFood]:
        """Search foods by name, falling back to the first entries."""
        if not query or not query.strip():
            return list(self.foods[:limit])
        needle = _fold(query)
        return [food for food in self.foods if needle in _fold(food.name)][:limit]

    def get(self, name: str) -> LibraryFood | None:
        """Return a food by exact name."""
        for food in self.foods:
            if food.name == name:
                return food
        return None


def _fold(text: str) -> str:
    """Lowercase and strip accents for matching."""
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))
