"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from menu_planner.adapters.gemini_menu_client import HttpxGeminiMenuClient
from menu_planner.adapters.openai_menu_client import OpenAIMenuClient
from menu_planner.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from menu_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from menu_planner.config import Settings, parse_model_list
from menu_planner.services.food_log import FoodLogService
from menu_planner.services.menu import MenuParseService, MenuTextClient
from menu_planner.services.planner import PlanningService
from menu_planner.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    food_log_service: FoodLogService
    menu_parse_service: MenuParseService
    planning_service: PlanningService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    food_log_service = FoodLogService(SupabaseFoodLogRepository(supabase_client))
    planning_service = PlanningService(
        profile_service=profile_service,
        food_log_service=food_log_service,
    )

    menu_client: MenuTextClient | None = None
    api_key: str | None = None
    gemini_client: HttpxGeminiMenuClient | None = None
    provider = resolved_settings.menu_parser_provider.lower()
    if provider == "openai":
        menu_client = OpenAIMenuClient.create(resolved_settings.openai_model)
        api_key = resolved_settings.openai_api_key
    elif provider == "gemini":
        gemini_client = HttpxGeminiMenuClient.create(
            base_url=resolved_settings.gemini_base_url,
            models=parse_model_list(resolved_settings.gemini_models),
        )
        menu_client = gemini_client
        api_key = resolved_settings.gemini_api_key
    menu_parse_service = MenuParseService(
        client=menu_client,
        api_key=api_key,
        timeout_seconds=resolved_settings.menu_parse_timeout_seconds,
    )

    async def close_resources() -> None:
        if gemini_client is not None:
            await gemini_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        food_log_service=food_log_service,
        menu_parse_service=menu_parse_service,
        planning_service=planning_service,
        close_resources=close_resources,
    )
