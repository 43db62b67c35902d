"""Pydantic request models for the HTTP API."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from menu_planner.domain.food import Category, FoodItem, Preference
from menu_planner.domain.log import LogEntry
from menu_planner.domain.plans import DayPlan, MacroTotals, MealPlan, MealSlot
from menu_planner.domain.targets import Profile
from menu_planner.services.selection import MealSelection


class ProfilePayload(BaseModel):
    """Biometric form data."""

    model_config = ConfigDict(populate_by_name=True)

    age: str | int
    gender: str = "other"
    height: str | int
    weight: str | int
    activity_level: str = Field(alias="activityLevel")
    goal: str = "maintain"

    def to_domain(self) -> Profile:
        """Convert to a domain profile."""
        return Profile(
            age=str(self.age),
            gender=self.gender,
            height=str(self.height),
            weight=str(self.weight),
            activity_level=self.activity_level,
            goal=self.goal,
        )


class FoodItemPayload(BaseModel):
    """Food item in the shared item shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    category: str = Category.OTHER.value
    serving_size: str | None = Field(default=None, alias="servingSize")

    def to_domain(self) -> FoodItem:
        """Convert to a domain item."""
        return FoodItem(
            id=self.id,
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            category=Category.parse(self.category),
            serving_size=self.serving_size,
        )


class MenuParseRequest(BaseModel):
    """Raw menu text with an optional text-service credential."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    api_key: str | None = Field(default=None, alias="apiKey")


class BudgetPayload(BaseModel):
    """Remaining calories and macros."""

    calories: float
    protein: float
    carbs: float
    fats: float

    def to_domain(self) -> MacroTotals:
        """Convert to domain totals."""
        return MacroTotals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )


class PlanRequest(BaseModel):
    """Stateless plan generation request."""

    items: list[FoodItemPayload]
    preferences: dict[str, Preference] = Field(default_factory=dict)
    remaining: BudgetPayload


class UserPlanRequest(BaseModel):
    """Plan generation against a user's stored targets and today's log."""

    items: list[FoodItemPayload]
    preferences: dict[str, Preference] = Field(default_factory=dict)
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class LogItemsRequest(BaseModel):
    """Items to append to the log."""

    items: list[FoodItemPayload]
    timestamp: datetime | None = None

    def logged_at(self) -> datetime | None:
        """Return the timestamp as an aware datetime."""
        return _as_utc(self.timestamp) if self.timestamp else None


class MealPayload(BaseModel):
    """One meal of a generated plan; serialized totals are ignored."""

    items: list[FoodItemPayload] = Field(default_factory=list)


class DayPlanPayload(BaseModel):
    """A generated day plan as returned by the plan endpoints."""

    id: str
    name: str = ""
    breakfast: MealPayload
    lunch: MealPayload
    dinner: MealPayload

    def to_domain(self) -> DayPlan:
        """Convert to a domain day plan."""
        payloads = {
            MealSlot.BREAKFAST: self.breakfast,
            MealSlot.LUNCH: self.lunch,
            MealSlot.DINNER: self.dinner,
        }
        meals = {
            slot: MealPlan(
                slot=slot, items=tuple(item.to_domain() for item in meal.items)
            )
            for slot, meal in payloads.items()
        }
        return DayPlan(
            id=self.id,
            name=self.name,
            breakfast=meals[MealSlot.BREAKFAST],
            lunch=meals[MealSlot.LUNCH],
            dinner=meals[MealSlot.DINNER],
        )


class LogSelectionRequest(BaseModel):
    """Generated plans plus the plan id chosen for each slot."""

    plans: list[DayPlanPayload]
    chosen: dict[MealSlot, str] = Field(default_factory=dict)
    timestamp: datetime | None = None

    def selection(self) -> MealSelection:
        """Return the chosen meals as a selection."""
        return MealSelection(chosen=dict(self.chosen))

    def logged_at(self) -> datetime | None:
        """Return the timestamp as an aware datetime."""
        return _as_utc(self.timestamp) if self.timestamp else None


class LogEntryPayload(BaseModel):
    """A logged item with its timestamp."""

    item: FoodItemPayload
    timestamp: datetime

    def to_domain(self) -> LogEntry:
        """Convert to a domain log entry."""
        return LogEntry(item=self.item.to_domain(), logged_at=_as_utc(self.timestamp))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
