"""Day-plan generation across breakfast, lunch and dinner."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from uuid import UUID

from menu_planner.domain.food import Category, FoodItem, Preference
from menu_planner.domain.plans import DayPlan, MacroTotals, MealPlan, MealSlot
from menu_planner.services.allocator import allocate_meal, preference_of
from menu_planner.services.food_log import FoodLogService, remaining_budget
from menu_planner.services.profiles import ProfileService

PLAN_COUNT = 3
ROTATION_STEP = 2

SLOT_RATIOS: dict[MealSlot, float] = {
    MealSlot.BREAKFAST: 0.30,
    MealSlot.LUNCH: 0.40,
    MealSlot.DINNER: 0.30,
}

SLOT_CATEGORIES: dict[MealSlot, frozenset[Category]] = {
    MealSlot.BREAKFAST: frozenset(
        {Category.BREAKFAST, Category.BEVERAGE, Category.SNACKS}
    ),
    MealSlot.LUNCH: frozenset(
        {Category.MAIN_COURSE, Category.BREAD, Category.SIDES, Category.BEVERAGE}
    ),
    MealSlot.DINNER: frozenset(
        {Category.MAIN_COURSE, Category.BREAD, Category.SIDES, Category.DESSERT}
    ),
}

_logger = logging.getLogger(__name__)


def generate_day_plans(
    items: Sequence[FoodItem],
    preferences: Mapping[str, Preference],
    remaining: MacroTotals,
) -> list[DayPlan]:
    """Generate three day plans from one item pool.

    Plans differ only by rotating each slot's pool left by two positions per
    plan index, which changes which items the greedy fill reaches first.
    """
    snapshot = MappingProxyType(dict(preferences))
    pool = candidate_pool(items, snapshot)
    slot_pools = suitability_pools(pool)
    budgets = split_budget(remaining)
    _logger.info(
        "Generating day plans: pool=%s breakfast=%s lunch=%s dinner=%s",
        len(pool),
        len(slot_pools[MealSlot.BREAKFAST]),
        len(slot_pools[MealSlot.LUNCH]),
        len(slot_pools[MealSlot.DINNER]),
    )

    plans: list[DayPlan] = []
    for index in range(PLAN_COUNT):
        used_ids: frozenset[str] = frozenset()
        meals: dict[MealSlot, MealPlan] = {}
        for slot in MealSlot:
            rotated = rotate(slot_pools[slot], ROTATION_STEP * index)
            allocation = allocate_meal(rotated, snapshot, used_ids, budgets[slot])
            used_ids = allocation.used_ids
            meals[slot] = MealPlan(
                slot=slot,
                items=tuple(
                    item.with_id(f"plan-{index}-{slot.value}-{item.id}")
                    for item in allocation.items
                ),
            )
        plans.append(
            DayPlan(
                id=f"plan-{index}",
                name=f"Option {chr(ord('A') + index)}",
                breakfast=meals[MealSlot.BREAKFAST],
                lunch=meals[MealSlot.LUNCH],
                dinner=meals[MealSlot.DINNER],
            )
        )
    return plans


def candidate_pool(
    items: Sequence[FoodItem], preferences: Mapping[str, Preference]
) -> list[FoodItem]:
    """Must-have items first, then optional ones; not-necessary items are dropped."""
    must_have = [
        item
        for item in items
        if preference_of(preferences, item.id) is Preference.MUST_HAVE
    ]
    optional = [
        item
        for item in items
        if preference_of(preferences, item.id) is Preference.OPTIONAL
    ]
    return must_have + optional


def suitability_pools(pool: Sequence[FoodItem]) -> dict[MealSlot, list[FoodItem]]:
    """Partition a pool by slot; breakfast falls back to the lunch pool if empty."""
    pools = {
        slot: [item for item in pool if item.category in categories]
        for slot, categories in SLOT_CATEGORIES.items()
    }
    if not pools[MealSlot.BREAKFAST]:
        pools[MealSlot.BREAKFAST] = list(pools[MealSlot.LUNCH])
    return pools


def rotate(items: Sequence[FoodItem], steps: int) -> list[FoodItem]:
    """Cyclically shift a sequence left by ``steps`` positions."""
    if not items:
        return []
    offset = steps % len(items)
    return list(items[offset:]) + list(items[:offset])


def split_budget(remaining: MacroTotals) -> dict[MealSlot, MacroTotals]:
    """Per-slot sub-budgets of a remaining daily budget."""
    return {slot: remaining.scaled(ratio) for slot, ratio in SLOT_RATIOS.items()}


@dataclass
class PlanningService:
    """Plans the rest of a user's day from stored targets and today's log."""

    profile_service: ProfileService
    food_log_service: FoodLogService

    def plan_for_user(
        self,
        user_id: UUID,
        items: Sequence[FoodItem],
        preferences: Mapping[str, Preference],
        timezone_name: str,
        now: datetime | None = None,
    ) -> list[DayPlan] | None:
        """Return three plans, or None when the user has no valid targets."""
        stored = self.profile_service.load_profile(user_id)
        if stored is None or stored.targets is None:
            return None
        consumed = self.food_log_service.consumed_today(user_id, timezone_name, now)
        return generate_day_plans(
            items, preferences, remaining_budget(stored.targets, consumed)
        )
