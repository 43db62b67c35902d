"""Menu text parsing: local normalizer and text-service fallback."""

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from menu_planner.domain.food import FoodItem, Preference
from menu_planner.domain.parsing import ExternalMenuItem
from menu_planner.services.classifier import estimate_nutrition

MIN_ITEM_LENGTH = 3

_PREFIX = re.compile(r"^[\d.\-*•→➤►◆]+\s*")
_CODE_FENCES = ("```json", "```")

NO_ITEMS_FOUND = "No food items found in the text."
NO_ITEMS_FOUND_TIP = (
    "No food items found in the text. "
    "Tip: add a menu service API key for better parsing."
)

MENU_PROMPT = """Parse the following menu text and extract all food items with their \
nutritional information.

INSTRUCTIONS:
1. Extract all food items from the text
2. Estimate calories, protein, carbs, and fats per item
3. Categorize each item by meal type
4. Focus on Indian and common foods
5. If an item says "2 rotis" or "3 eggs", calculate macros for the TOTAL quantity
6. If a line says "Paneer bhurji + 2 rotis", treat it as ONE meal and sum the macros
7. IGNORE noise like headers, prices, dates, or section titles

MENU TEXT:
{text}

OUTPUT FORMAT (return ONLY valid JSON, no markdown):
[
  {{
    "name": "Food item name",
    "calories": 450,
    "protein": 25,
    "carbs": 60,
    "fats": 12,
    "category": "Breakfast|Main Course|Sides|Snacks|Dessert|Beverage|Bread",
    "servingSize": "The quantity/portion size (e.g., '1 cup', '2 pieces', '1 bowl')"
  }}
]

If NO food items are found, return an empty array: []"""

_logger = logging.getLogger(__name__)


class MenuResponseError(ValueError):
    """Raised when the text service returns an unusable payload."""


class MenuTextClient(Protocol):
    """Interface for the external text-understanding service."""

    provider: str

    async def complete(self, *, prompt: str, api_key: str) -> str:
        """Return the raw model text for a prompt."""


def normalize_menu(text: str) -> list[FoodItem]:
    """Split pasted menu text into classified items, preserving order."""
    lines = [line for line in text.split("\n") if line.strip()]
    items: list[FoodItem] = []
    for index, line in enumerate(lines):
        name = _PREFIX.sub("", line.strip()).strip()
        if len(name) < MIN_ITEM_LENGTH:
            continue
        items.append(
            FoodItem.from_estimate(f"parsed-{index}", name, estimate_nutrition(name))
        )
    return items


def parse_menu_response(raw_text: str, id_prefix: str) -> list[FoodItem]:
    """Convert raw service output into items.

    Accepts a JSON array, optionally wrapped in markdown code fences or in an
    object under ``items``.
    """
    cleaned = raw_text
    for fence in _CODE_FENCES:
        cleaned = cleaned.replace(fence, "")
    cleaned = cleaned.strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MenuResponseError("Menu service returned invalid JSON") from exc

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise MenuResponseError("Invalid response format: not an array")

    items: list[FoodItem] = []
    for index, raw_item in enumerate(data):
        if not isinstance(raw_item, dict):
            raise MenuResponseError(f"Item {index} is not an object")
        try:
            parsed = ExternalMenuItem.model_validate(raw_item)
        except ValidationError as exc:
            raise MenuResponseError(f"Item {index} is malformed") from exc
        items.append(parsed.to_food_item(f"{id_prefix}-{index}"))
    return items


def build_menu_prompt(text: str) -> str:
    """Return the extraction prompt for a menu."""
    return MENU_PROMPT.format(text=text)


@dataclass(frozen=True)
class MenuParseResult:
    """Items from one parse request and how they were produced."""

    items: tuple[FoodItem, ...]
    source: str
    advisory: str | None = None
    preferences: dict[str, Preference] = field(default_factory=dict)


@dataclass
class MenuParseService:
    """Parses menus through the text service, falling back to the local parser."""

    client: MenuTextClient | None
    api_key: str | None = None
    timeout_seconds: float = 20.0

    async def parse(self, text: str, api_key: str | None = None) -> MenuParseResult:
        """Parse menu text; external failures never propagate."""
        key = api_key or self.api_key
        if self.client is None or not key:
            items = normalize_menu(text)
            _logger.info("Menu parsed locally: items=%s", len(items))
            return _result(items, "local", NO_ITEMS_FOUND_TIP if not items else None)

        try:
            raw = await asyncio.wait_for(
                self.client.complete(prompt=build_menu_prompt(text), api_key=key),
                timeout=self.timeout_seconds,
            )
            items = parse_menu_response(raw, id_prefix=self.client.provider)
        except Exception as exc:
            _logger.warning(
                "Menu service %s failed (%s, status=%s), using local parser",
                self.client.provider,
                type(exc).__name__,
                _status_code_from_exception(exc),
            )
            items = normalize_menu(text)
            advisory = NO_ITEMS_FOUND if not items else _advisory_for(exc)
            return _result(items, "local", advisory)

        _logger.info(
            "Menu parsed by %s: items=%s", self.client.provider, len(items)
        )
        return _result(items, "ai", NO_ITEMS_FOUND if not items else None)


def _result(
    items: list[FoodItem], source: str, advisory: str | None
) -> MenuParseResult:
    return MenuParseResult(
        items=tuple(items),
        source=source,
        advisory=advisory,
        preferences={item.id: Preference.OPTIONAL for item in items},
    )


def _advisory_for(exc: Exception) -> str:
    message = str(exc)
    if isinstance(exc, TimeoutError):
        return "Menu service timed out. Using local parser."
    if "insufficient_quota" in message:
        return "Menu service quota exceeded. Using local parser."
    if _status_code_from_exception(exc) == "429" or "429" in message:
        return "Menu service rate limit reached. Using local parser."
    if isinstance(exc, MenuResponseError):
        return "Menu service returned an unreadable response. Using local parser."
    return "Menu service unavailable. Using local parser."


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
