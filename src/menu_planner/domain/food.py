"""Domain models for parsed food items."""

from dataclasses import dataclass, replace
from enum import StrEnum


class Category(StrEnum):
    """Meal category assigned to a food item."""

    BREAKFAST = "Breakfast"
    MAIN_COURSE = "Main Course"
    BREAD = "Bread"
    SIDES = "Sides"
    SNACKS = "Snacks"
    DESSERT = "Dessert"
    BEVERAGE = "Beverage"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> "Category":
        """Return the matching category, or Other for unknown values."""
        if isinstance(value, str):
            cleaned = value.strip().lower()
            for category in cls:
                if category.value.lower() == cleaned:
                    return category
        return cls.OTHER


class Preference(StrEnum):
    """User priority for a parsed item."""

    MUST_HAVE = "must-have"
    OPTIONAL = "optional"
    NOT_NECESSARY = "not-necessary"


@dataclass(frozen=True)
class NutritionEstimate:
    """Heuristic nutrition values for a single serving."""

    calories: float
    protein: float
    carbs: float
    fats: float
    category: Category


@dataclass(frozen=True)
class FoodItem:
    """A food item with estimated nutrition."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    category: Category
    serving_size: str | None = None

    @classmethod
    def from_estimate(
        cls, item_id: str, name: str, estimate: NutritionEstimate
    ) -> "FoodItem":
        """Build an item from a classifier estimate."""
        return cls(
            id=item_id,
            name=name,
            calories=estimate.calories,
            protein=estimate.protein,
            carbs=estimate.carbs,
            fats=estimate.fats,
            category=estimate.category,
        )

    def with_id(self, item_id: str) -> "FoodItem":
        """Return a copy of the item under a different id."""
        return replace(self, id=item_id)

    def to_dict(self) -> dict[str, object]:
        """Serialize to the external item shape."""
        payload: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "category": self.category.value,
        }
        if self.serving_size is not None:
            payload["servingSize"] = self.serving_size
        return payload
