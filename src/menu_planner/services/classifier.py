"""Keyword-based nutrition estimates for food names.

Rules are checked in order and the first match wins, so more specific keywords
("butter chicken", "dal" + "tadka") must stay ahead of broader ones.
"""

from dataclasses import dataclass

from menu_planner.domain.food import Category, NutritionEstimate


@dataclass(frozen=True)
class KeywordRule:
    """Matches when every `all_of` keyword and at least one `any_of` keyword occur."""

    any_of: tuple[str, ...]
    estimate: NutritionEstimate
    all_of: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        """Return True if the lowercased name satisfies the rule."""
        if not all(keyword in name for keyword in self.all_of):
            return False
        return not self.any_of or any(keyword in name for keyword in self.any_of)


def _rule(
    keywords: tuple[str, ...],
    calories: float,
    protein: float,
    carbs: float,
    fats: float,
    category: Category,
    all_of: tuple[str, ...] = (),
) -> KeywordRule:
    return KeywordRule(
        any_of=keywords,
        estimate=NutritionEstimate(calories, protein, carbs, fats, category),
        all_of=all_of,
    )


_MAIN = Category.MAIN_COURSE

RULES: tuple[KeywordRule, ...] = (
    # Rice dishes
    _rule(("biryani",), 450, 12, 75, 12, _MAIN),
    _rule(("pulao", "pilaf"), 380, 10, 65, 10, _MAIN),
    _rule(("fried rice",), 400, 8, 70, 12, _MAIN),
    _rule(("jeera rice", "plain rice"), 200, 4, 44, 1, _MAIN),
    # Breads
    _rule(("naan",), 260, 8, 45, 5, Category.BREAD),
    _rule(("roti", "chapati"), 120, 4, 22, 2, Category.BREAD),
    _rule(("paratha",), 280, 6, 38, 12, Category.BREAD),
    _rule(("puri", "poori"), 180, 3, 20, 10, Category.BREAD),
    # Curries
    _rule(("chicken curry", "chicken masala"), 320, 35, 12, 18, _MAIN),
    _rule(("butter chicken",), 400, 30, 15, 25, _MAIN),
    _rule((), 380, 18, 22, 25, _MAIN, all_of=("paneer", "butter")),
    _rule(("tikka", "masala"), 320, 20, 18, 20, _MAIN, all_of=("paneer",)),
    _rule(("chole", "chana"), 280, 14, 42, 8, _MAIN),
    _rule(("rajma",), 250, 15, 38, 6, _MAIN),
    # Dal
    _rule((), 180, 12, 25, 5, _MAIN, all_of=("dal", "tadka")),
    _rule(("dal",), 150, 10, 22, 4, _MAIN),
    # South Indian breakfast
    _rule(("dosa",), 200, 6, 35, 5, Category.BREAKFAST),
    _rule(("idli",), 90, 3, 17, 1, Category.BREAKFAST),
    _rule(("vada",), 150, 4, 18, 8, Category.BREAKFAST),
    _rule(("upma",), 200, 6, 32, 6, Category.BREAKFAST),
    _rule(("uttapam",), 220, 7, 38, 5, Category.BREAKFAST),
    # Sides
    _rule(("raita",), 90, 4, 8, 5, Category.SIDES),
    _rule(("salad",), 80, 3, 12, 2, Category.SIDES),
    _rule(("pickle", "achar"), 40, 1, 6, 2, Category.SIDES),
    _rule(("papad",), 50, 2, 8, 1, Category.SIDES),
    # Snacks
    _rule(("samosa",), 250, 5, 30, 13, Category.SNACKS),
    _rule(("pakora", "bhaji"), 200, 4, 22, 12, Category.SNACKS),
    _rule(("sandwich",), 280, 12, 40, 8, Category.SNACKS),
    # Desserts
    _rule(("gulab jamun",), 150, 3, 25, 6, Category.DESSERT),
    _rule(("kheer",), 180, 5, 28, 6, Category.DESSERT),
    _rule(("halwa",), 200, 3, 32, 8, Category.DESSERT),
    # Beverages
    _rule(("tea", "chai"), 60, 2, 10, 2, Category.BEVERAGE),
    _rule(("coffee",), 50, 2, 8, 2, Category.BEVERAGE),
    _rule(("lassi",), 150, 6, 22, 4, Category.BEVERAGE),
)

DEFAULT_ESTIMATE = NutritionEstimate(
    calories=250, protein=10, carbs=35, fats=8, category=Category.OTHER
)


def estimate_nutrition(food_name: str) -> NutritionEstimate:
    """Return the estimate of the first matching rule, or the default."""
    name = food_name.lower()
    for rule in RULES:
        if rule.matches(name):
            return rule.estimate
    return DEFAULT_ESTIMATE
