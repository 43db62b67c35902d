"""Selection of generated meals, one plan per slot."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from menu_planner.domain.food import FoodItem
from menu_planner.domain.plans import DayPlan, MealSlot


@dataclass(frozen=True)
class MealSelection:
    """Which plan's meal is chosen for each slot.

    Choosing a meal replaces any meal previously chosen for the same slot;
    choosing the already-chosen meal clears the slot.
    """

    chosen: dict[MealSlot, str] = field(default_factory=dict)

    def toggle(self, slot: MealSlot, plan_id: str) -> "MealSelection":
        """Return the selection after clicking a plan's meal."""
        chosen = dict(self.chosen)
        if chosen.get(slot) == plan_id:
            del chosen[slot]
        else:
            chosen[slot] = plan_id
        return MealSelection(chosen=chosen)

    def plan_for(self, slot: MealSlot) -> str | None:
        """Return the plan id chosen for a slot."""
        return self.chosen.get(slot)

    def is_selected(self, slot: MealSlot, plan_id: str) -> bool:
        """Return True if the plan's meal is chosen for the slot."""
        return self.chosen.get(slot) == plan_id

    def selected_items(self, plans: Sequence[DayPlan]) -> list[FoodItem]:
        """Resolve the chosen meals' items in slot order."""
        by_id = {plan.id: plan for plan in plans}
        items: list[FoodItem] = []
        for slot in MealSlot:
            plan = by_id.get(self.chosen.get(slot, ""))
            if plan is not None:
                items.extend(plan.meal(slot).items)
        return items
