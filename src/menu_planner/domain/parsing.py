"""Models for menu items returned by the text-understanding service."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from menu_planner.domain.food import Category, FoodItem

DEFAULT_ITEM_NAME = "Unknown Item"
DEFAULT_SERVING_SIZE = "1 serving"


class ExternalMenuItem(BaseModel):
    """Single food item extracted from menu text."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = DEFAULT_ITEM_NAME
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    category: Category = Category.OTHER
    serving_size: str = Field(default=DEFAULT_SERVING_SIZE, alias="servingSize")

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return DEFAULT_ITEM_NAME

    @field_validator("calories", "protein", "carbs", "fats", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> float:
        return _to_amount(value)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> Category:
        return Category.parse(value)

    @field_validator("serving_size", mode="before")
    @classmethod
    def _default_serving(cls, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return DEFAULT_SERVING_SIZE

    def to_food_item(self, item_id: str) -> FoodItem:
        """Convert to a domain item under the given id."""
        return FoodItem(
            id=item_id,
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            category=self.category,
            serving_size=self.serving_size,
        )


def _to_amount(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount
