"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from menu_planner.config import Settings
from menu_planner.containers import AppContainer
from menu_planner.domain.food import Category, FoodItem
from menu_planner.domain.log import LogEntry
from menu_planner.domain.targets import Profile, StoredProfile, Targets
from menu_planner.services.food_log import FoodLogRepository, FoodLogService
from menu_planner.services.menu import MenuParseService, MenuTextClient
from menu_planner.services.planner import PlanningService
from menu_planner.services.profiles import ProfileRepository, ProfileService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    records: dict[UUID, StoredProfile] = field(default_factory=dict)

    def upsert_profile(
        self, user_id: UUID, profile: Profile, targets: Targets
    ) -> None:
        self.records[user_id] = StoredProfile(profile=profile, targets=targets)

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        return self.records.get(user_id)


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory log repository with set-like append/remove."""

    entries: dict[UUID, list[LogEntry]] = field(default_factory=dict)

    def add_entries(self, user_id: UUID, entries: list[LogEntry]) -> None:
        history = self.entries.setdefault(user_id, [])
        for entry in entries:
            if all(existing.key != entry.key for existing in history):
                history.append(entry)

    def remove_entry(self, user_id: UUID, entry_key: str) -> None:
        history = self.entries.get(user_id, [])
        self.entries[user_id] = [entry for entry in history if entry.key != entry_key]

    def list_entries(self, user_id: UUID) -> list[LogEntry]:
        return list(self.entries.get(user_id, []))

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[LogEntry]:
        return [
            entry
            for entry in self.entries.get(user_id, [])
            if start <= entry.logged_at < end
        ]


@dataclass
class FakeMenuClient(MenuTextClient):
    """Fake text service returning a fixed reply or raising an error."""

    reply: str = (
        '[{"name": "Paneer Tikka", "calories": 320, "protein": 20, '
        '"carbs": 18, "fats": 20, "category": "Main Course", '
        '"servingSize": "1 plate"}]'
    )
    error: Exception | None = None
    delay_seconds: float = 0.0
    provider: str = "fake"
    calls: list[str] = field(default_factory=list)

    async def complete(self, *, prompt: str, api_key: str) -> str:
        self.calls.append(api_key)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.reply


def make_item(  # noqa: PLR0913
    item_id: str,
    calories: float,
    protein: float = 0,
    carbs: float = 0,
    fats: float = 0,
    category: Category = Category.MAIN_COURSE,
    name: str | None = None,
) -> FoodItem:
    """Build a food item for tests."""
    return FoodItem(
        id=item_id,
        name=name or item_id,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        category=category,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        menu_parser_provider="local",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def menu_client() -> FakeMenuClient:
    return FakeMenuClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    food_log_repository: InMemoryFoodLogRepository,
) -> AppContainer:
    profile_service = ProfileService(profile_repository)
    food_log_service = FoodLogService(food_log_repository)
    planning_service = PlanningService(
        profile_service=profile_service,
        food_log_service=food_log_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        food_log_service=food_log_service,
        menu_parse_service=MenuParseService(client=None),
        planning_service=planning_service,
        close_resources=close_resources,
    )
