"""Consumption log service."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from menu_planner.domain.food import FoodItem
from menu_planner.domain.log import LogEntry
from menu_planner.domain.plans import DayPlan, MacroTotals
from menu_planner.domain.targets import Targets
from menu_planner.services.selection import MealSelection


class FoodLogRepository(Protocol):
    """Persistence interface for a user's log history."""

    def add_entries(self, user_id: UUID, entries: list[LogEntry]) -> None:
        """Append entries; adding an entry already present is a no-op."""

    def remove_entry(self, user_id: UUID, entry_key: str) -> None:
        """Remove an entry by key; removing an absent entry is a no-op."""

    def list_entries(self, user_id: UUID) -> list[LogEntry]:
        """Return the full history in logging order."""

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[LogEntry]:
        """Return entries logged within a time range."""


@dataclass
class FoodLogService:
    """Service for appending to and reading the consumption log."""

    repository: FoodLogRepository

    def log_items(
        self,
        user_id: UUID,
        items: Sequence[FoodItem],
        logged_at: datetime | None = None,
    ) -> list[LogEntry]:
        """Log selected items under one timestamp."""
        if not items:
            return []
        timestamp = logged_at or datetime.now(tz=UTC)
        entries = [LogEntry(item=item, logged_at=timestamp) for item in items]
        self.repository.add_entries(user_id, entries)
        return entries

    def add_manual_item(
        self, user_id: UUID, item: FoodItem, logged_at: datetime | None = None
    ) -> LogEntry:
        """Log a single manually entered item."""
        return self.log_items(user_id, [item], logged_at)[0]

    def log_selection(
        self,
        user_id: UUID,
        selection: MealSelection,
        plans: Sequence[DayPlan],
        logged_at: datetime | None = None,
    ) -> list[LogEntry]:
        """Log the items of the meals chosen across generated plans."""
        return self.log_items(user_id, selection.selected_items(plans), logged_at)

    def remove_entry(self, user_id: UUID, entry: LogEntry) -> None:
        """Remove an entry from the history."""
        self.repository.remove_entry(user_id, entry.key)

    def history(self, user_id: UUID) -> list[LogEntry]:
        """Return the user's log history."""
        return self.repository.list_entries(user_id)

    def consumed_today(
        self, user_id: UUID, timezone_name: str, now: datetime | None = None
    ) -> MacroTotals:
        """Sum what was logged today in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        current = (now or datetime.now(tz=UTC)).astimezone(tz)
        start = current.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        entries = self.repository.list_entries_between(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return consumed_totals(
            entry
            for entry in entries
            if entry.logged_at.astimezone(tz).date() == start.date()
        )


def consumed_totals(entries: Iterable[LogEntry]) -> MacroTotals:
    """Sum the nutrition of logged entries."""
    return MacroTotals.of_items(entry.item for entry in entries)


def remaining_budget(targets: Targets, consumed: MacroTotals) -> MacroTotals:
    """Daily targets minus consumption; values may be negative."""
    daily = MacroTotals(
        calories=targets.daily_calories,
        protein=targets.macros.protein,
        carbs=targets.macros.carbs,
        fats=targets.macros.fats,
    )
    return daily - consumed
