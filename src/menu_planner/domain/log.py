"""Domain models for the consumption log."""

from dataclasses import dataclass
from datetime import datetime

from menu_planner.domain.food import Category, FoodItem


@dataclass(frozen=True)
class LogEntry:
    """A consumed item and when it was logged."""

    item: FoodItem
    logged_at: datetime

    @property
    def key(self) -> str:
        """Identity of the entry within a user's history."""
        return f"{self.logged_at.isoformat()}|{self.item.id}"

    def to_dict(self) -> dict[str, object]:
        """Serialize the entry."""
        return {"item": self.item.to_dict(), "timestamp": self.logged_at.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LogEntry":
        """Build an entry from a stored document."""
        raw_item = data.get("item") or {}
        item = FoodItem(
            id=str(raw_item.get("id", "")),
            name=str(raw_item.get("name", "")),
            calories=float(raw_item.get("calories", 0.0)),
            protein=float(raw_item.get("protein", 0.0)),
            carbs=float(raw_item.get("carbs", 0.0)),
            fats=float(raw_item.get("fats", 0.0)),
            category=Category.parse(raw_item.get("category")),
            serving_size=raw_item.get("servingSize"),
        )
        return cls(item=item, logged_at=datetime.fromisoformat(str(data["timestamp"])))
