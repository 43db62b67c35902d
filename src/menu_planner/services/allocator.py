"""Greedy selection of items to fill one meal's calorie and macro budget."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from menu_planner.domain.food import FoodItem, Preference
from menu_planner.domain.plans import MacroTotals

MUST_HAVE_CALORIE_TOLERANCE = 1.1
STOP_REMAINING_CALORIES = 50.0
CANDIDATE_CALORIE_SLACK = 1.05
CANDIDATE_CALORIE_MARGIN = 50.0
MACRO_SCORE_CAP = 1.2
SATURATED_MACRO_PENALTY = -0.1

PROTEIN_WEIGHT = 2.0
CALORIE_FILL_WEIGHT = 1.5
CARBS_WEIGHT = 1.0
FATS_WEIGHT = 1.0


@dataclass(frozen=True)
class MealAllocation:
    """Items selected for a meal and the used ids after selection."""

    items: tuple[FoodItem, ...]
    used_ids: frozenset[str]

    @property
    def totals(self) -> MacroTotals:
        """Totals across the selected items."""
        return MacroTotals.of_items(self.items)


def preference_of(
    preferences: Mapping[str, Preference], item_id: str
) -> Preference:
    """Return the item's tier, defaulting to optional."""
    return preferences.get(item_id, Preference.OPTIONAL)


def allocate_meal(
    pool: Sequence[FoodItem],
    preferences: Mapping[str, Preference],
    used_ids: frozenset[str],
    budget: MacroTotals,
) -> MealAllocation:
    """Select must-have items, then greedily fill the remaining budget.

    Items whose id is in ``used_ids`` are never selected. An under-filled meal is
    a valid outcome.
    """
    used = set(used_ids)
    available = [item for item in pool if item.id not in used]
    selected: list[FoodItem] = []
    consumed = MacroTotals.zero()

    calorie_ceiling = budget.calories * MUST_HAVE_CALORIE_TOLERANCE
    for item in available:
        if preference_of(preferences, item.id) is not Preference.MUST_HAVE:
            continue
        if item.id in used:
            continue
        if consumed.calories + item.calories <= calorie_ceiling:
            selected.append(item)
            consumed = consumed + MacroTotals.of_item(item)
            used.add(item.id)

    candidates = [
        item
        for item in available
        if preference_of(preferences, item.id) is not Preference.MUST_HAVE
    ]
    while True:
        remaining = budget - consumed
        if remaining.calories < STOP_REMAINING_CALORIES:
            break

        best_item: FoodItem | None = None
        best_score = float("-inf")
        calorie_limit = (
            remaining.calories * CANDIDATE_CALORIE_SLACK + CANDIDATE_CALORIE_MARGIN
        )
        for item in candidates:
            if item.id in used or item.calories > calorie_limit:
                continue
            score = score_candidate(item, remaining)
            if score > best_score:
                best_score = score
                best_item = item

        if best_item is None:
            break
        selected.append(best_item)
        consumed = consumed + MacroTotals.of_item(best_item)
        used.add(best_item.id)

    return MealAllocation(items=tuple(selected), used_ids=frozenset(used))


def score_candidate(item: FoodItem, remaining: MacroTotals) -> float:
    """Score how well an item fills the remaining gaps.

    Protein sufficiency weighs most, then calorie-budget use, then carbs and
    fats equally. ``remaining.calories`` must be positive.
    """
    protein = _macro_term(item.protein, remaining.protein)
    carbs = _macro_term(item.carbs, remaining.carbs)
    fats = _macro_term(item.fats, remaining.fats)
    calorie_fill = min(item.calories / remaining.calories, 1.0)
    return (
        PROTEIN_WEIGHT * protein
        + CALORIE_FILL_WEIGHT * calorie_fill
        + CARBS_WEIGHT * carbs
        + FATS_WEIGHT * fats
    )


def _macro_term(amount: float, remaining: float) -> float:
    if remaining > 0:
        return min(amount / remaining, MACRO_SCORE_CAP)
    if amount > 0:
        return SATURATED_MACRO_PENALTY
    return 0.0
