"""Domain models for generated meal plans."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from menu_planner.domain.food import FoodItem


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrient grams."""

    calories: float
    protein: float
    carbs: float
    fats: float

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )

    def __sub__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories - other.calories,
            protein=self.protein - other.protein,
            carbs=self.carbs - other.carbs,
            fats=self.fats - other.fats,
        )

    def scaled(self, ratio: float) -> "MacroTotals":
        """Return totals multiplied by a ratio."""
        return MacroTotals(
            calories=self.calories * ratio,
            protein=self.protein * ratio,
            carbs=self.carbs * ratio,
            fats=self.fats * ratio,
        )

    @classmethod
    def zero(cls) -> "MacroTotals":
        """Return empty totals."""
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def of_item(cls, item: FoodItem) -> "MacroTotals":
        """Return the totals contributed by one item."""
        return cls(
            calories=item.calories,
            protein=item.protein,
            carbs=item.carbs,
            fats=item.fats,
        )

    @classmethod
    def of_items(cls, items: Iterable[FoodItem]) -> "MacroTotals":
        """Sum totals across items."""
        total = cls.zero()
        for item in items:
            total = total + cls.of_item(item)
        return total

    def to_dict(self) -> dict[str, float]:
        """Serialize totals."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
        }


class MealSlot(StrEnum):
    """Meal slot within a day plan."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"

    @property
    def label(self) -> str:
        """Display name for the slot."""
        return self.value.capitalize()


@dataclass(frozen=True)
class MealPlan:
    """Items chosen for one meal slot."""

    slot: MealSlot
    items: tuple[FoodItem, ...]

    @property
    def name(self) -> str:
        """Display name of the meal."""
        return self.slot.label

    @property
    def totals(self) -> MacroTotals:
        """Totals across the meal's items."""
        return MacroTotals.of_items(self.items)

    def to_dict(self) -> dict[str, object]:
        """Serialize the meal with its totals."""
        return {
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
            **self.totals.to_dict(),
        }


@dataclass(frozen=True)
class DayPlan:
    """One breakfast, lunch and dinner combination."""

    id: str
    name: str
    breakfast: MealPlan
    lunch: MealPlan
    dinner: MealPlan

    @property
    def meals(self) -> tuple[MealPlan, MealPlan, MealPlan]:
        """Meals in slot order."""
        return (self.breakfast, self.lunch, self.dinner)

    def meal(self, slot: MealSlot) -> MealPlan:
        """Return the meal for a slot."""
        return {
            MealSlot.BREAKFAST: self.breakfast,
            MealSlot.LUNCH: self.lunch,
            MealSlot.DINNER: self.dinner,
        }[slot]

    @property
    def totals(self) -> MacroTotals:
        """Totals across all three meals."""
        total = MacroTotals.zero()
        for meal in self.meals:
            total = total + meal.totals
        return total

    def to_dict(self) -> dict[str, object]:
        """Serialize the plan with meal and plan totals."""
        totals = self.totals
        return {
            "id": self.id,
            "name": self.name,
            "breakfast": self.breakfast.to_dict(),
            "lunch": self.lunch.to_dict(),
            "dinner": self.dinner.to_dict(),
            "totalCalories": totals.calories,
            "totalProtein": totals.protein,
            "totalCarbs": totals.carbs,
            "totalFats": totals.fats,
        }
