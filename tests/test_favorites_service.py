"""Tests for favorites and the food library."""

import pytest

from nutriflow.domain.errors import MissingField, NotFound
from nutriflow.domain.library import FOOD_LIBRARY
from nutriflow.services.favorites import FavoritesService
from nutriflow.services.library import LibraryService
from tests.conftest import InMemoryFavoriteRepository


def test_add_and_list_favorites() -> None:
    service = FavoritesService(InMemoryFavoriteRepository())

    favorite = service.add_favorite(
        "u1", {"name": "Greek yogurt", "calories": "130", "protein": 12}
    )

    assert favorite.calories == 130
    assert favorite.fat == 0
    assert service.list_favorites("u1") == [favorite]
    assert service.list_favorites("u2") == []
    assert service.is_favorite("u1", "Greek yogurt")


def test_add_favorite_validates() -> None:
    service = FavoritesService(InMemoryFavoriteRepository())

    with pytest.raises(MissingField):
        service.add_favorite("u1", {"calories": 100})


def test_remove_favorite() -> None:
    service = FavoritesService(InMemoryFavoriteRepository())
    favorite = service.add_favorite("u1", {"name": "Oats", "calories": 150})

    service.remove_favorite("u1", favorite.id)

    assert service.list_favorites("u1") == []
    with pytest.raises(NotFound):
        service.remove_favorite("u1", favorite.id)


def test_toggle_favorite() -> None:
    service = FavoritesService(InMemoryFavoriteRepository())

    added = service.toggle_favorite("u1", {"name": "Oats", "calories": 150})
    removed = service.toggle_favorite("u1", {"name": "Oats", "calories": 150})

    assert added is not None
    assert removed is None
    assert not service.is_favorite("u1", "Oats")


def test_library_search_ignores_accents_and_case() -> None:
    service = LibraryService()

    results = service.search("FEIJAO")

    assert results
    assert all("Feijão" in food.name for food in results)


def test_library_search_without_query_returns_first_entries() -> None:
    service = LibraryService()

    assert service.search(None, limit=3) == list(FOOD_LIBRARY[:3])
    assert service.search("zzz-no-match") == []


def test_library_get_by_name() -> None:
    service = LibraryService()

    assert service.get(FOOD_LIBRARY[1].name) == FOOD_LIBRARY[1]
    assert service.get("Unknown") is None
