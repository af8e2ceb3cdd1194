"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutriflow.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutriflow.adapters.supabase_auth_provider import SupabaseAuthProvider
from nutriflow.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from nutriflow.adapters.supabase_meal_repository import SupabaseMealRepository
from nutriflow.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutriflow.config import Settings
from nutriflow.services.analysis import AnalysisService
from nutriflow.services.auth import AuthService
from nutriflow.services.favorites import FavoritesService
from nutriflow.services.library import LibraryService
from nutriflow.services.meals import MealService
from nutriflow.services.profiles import ProfileService
from nutriflow.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    meal_service: MealService
    stats_service: StatsService
    profile_service: ProfileService
    favorites_service: FavoritesService
    library_service: LibraryService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    # Signing in swaps the client's auth header, so sessions get their own client.
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(data_client)
    profile_service = ProfileService(SupabaseProfileRepository(data_client))
    auth_service = AuthService(
        provider=SupabaseAuthProvider(auth_client),
        profile_service=profile_service,
    )
    openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
    analysis_service = AnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        meal_service=MealService(meal_repository),
        stats_service=StatsService(meal_repository),
        profile_service=profile_service,
        favorites_service=FavoritesService(SupabaseFavoriteRepository(data_client)),
        library_service=LibraryService(),
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
