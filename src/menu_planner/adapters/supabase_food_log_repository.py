"""Supabase repository for the consumption log."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from menu_planner.domain.log import LogEntry
from menu_planner.services.food_log import FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for log entries keyed by (user, entry key)."""

    client: Client

    def add_entries(self, user_id: UUID, entries: list[LogEntry]) -> None:
        """Insert entries, ignoring ones already stored."""
        payload = [
            {
                "user_id": str(user_id),
                "entry_key": entry.key,
                "item": entry.item.to_dict(),
                "logged_at": entry.logged_at.isoformat(),
            }
            for entry in entries
        ]
        if payload:
            self.client.table("food_log_entries").upsert(
                payload,
                on_conflict="user_id,entry_key",
                ignore_duplicates=True,
            ).execute()

    def remove_entry(self, user_id: UUID, entry_key: str) -> None:
        """Delete an entry; deleting a missing entry affects no rows."""
        self.client.table("food_log_entries").delete().eq(
            "user_id", str(user_id)
        ).eq("entry_key", entry_key).execute()

    def list_entries(self, user_id: UUID) -> list[LogEntry]:
        """Return the full history ordered by time."""
        response = (
            self.client.table("food_log_entries")
            .select("item, logged_at")
            .eq("user_id", str(user_id))
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_entries_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[LogEntry]:
        """Return entries logged within a time range."""
        response = (
            self.client.table("food_log_entries")
            .select("item, logged_at")
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> LogEntry:
    return LogEntry.from_dict({"item": row.get("item"), "timestamp": row["logged_at"]})
