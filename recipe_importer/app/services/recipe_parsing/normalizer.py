"""Coerce untyped AI output into a validated ParsedRecipe.

Every field is repaired or dropped on its own; a malformed field never
invalidates the rest of the recipe, and ``normalize_recipe`` never raises on
the shape of its input.
"""

import logging
import re
from typing import Any, List, Optional

from recipe_importer.app.services.recipe_parsing.constants import DEFAULT_RECIPE_TITLE
from recipe_importer.app.services.recipe_parsing.ingredient_parser import parse_ingredient_line
from recipe_importer.app.services.recipe_parsing.models import ParsedIngredient, ParsedRecipe
from recipe_importer.app.services.recipe_parsing.parsing_utils import (
    coerce_number,
    parse_duration_minutes,
)

logger = logging.getLogger(__name__)

_STEP_SPLIT_RE = re.compile(r"(?:\d+\.\s*|\n)+")


def _first_present(raw: dict, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def normalize_title(value: Any) -> str:
    return _as_text(value) or DEFAULT_RECIPE_TITLE


def normalize_ingredient(entry: Any) -> ParsedIngredient:
    if isinstance(entry, str):
        return parse_ingredient_line(entry)
    if isinstance(entry, dict):
        return ParsedIngredient(
            name=_as_text(_first_present(entry, "name", "ingredient")),
            quantity=_as_text(_first_present(entry, "quantity", "amount")),
            unit=_as_text(entry.get("unit")),
        )
    return ParsedIngredient(name="")


def normalize_ingredients(value: Any) -> List[ParsedIngredient]:
    if not isinstance(value, list):
        return []
    ingredients = [normalize_ingredient(entry) for entry in value]
    return [ing for ing in ingredients if ing.name.strip()]


def normalize_instructions(value: Any) -> List[str]:
    steps: List[str] = []
    if isinstance(value, list):
        for entry in value:
            if isinstance(entry, str):
                steps.append(entry)
            elif isinstance(entry, dict):
                steps.append(_as_text(_first_present(entry, "text", "step", "description")))
    elif isinstance(value, str):
        steps = _STEP_SPLIT_RE.split(value)
    return [step.strip() for step in steps if step and step.strip()]


def normalize_minutes(value: Any) -> Optional[int]:
    number = coerce_number(value)
    if number is not None:
        minutes = int(round(number))
        return minutes if minutes >= 0 else None
    if isinstance(value, str):
        return parse_duration_minutes(value)
    return None


def normalize_servings(value: Any) -> Optional[int]:
    number = coerce_number(value)
    if number is None:
        return None
    servings = int(round(number))
    return servings if servings >= 1 else None


def normalize_optional_text(value: Any, allow_empty: bool = False) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value if value or allow_empty else None


def normalize_recipe(raw: Any) -> ParsedRecipe:
    """Build a ParsedRecipe from whatever JSON value the provider returned."""
    if not isinstance(raw, dict):
        logger.warning("AI response is not a JSON object (%s); using defaults", type(raw).__name__)
        raw = {}

    recipe = ParsedRecipe(
        title=normalize_title(raw.get("title")),
        description=normalize_optional_text(raw.get("description"), allow_empty=True),
        ingredients=normalize_ingredients(raw.get("ingredients")),
        instructions=normalize_instructions(raw.get("instructions")),
        prep_time=normalize_minutes(_first_present(raw, "prep_time", "prepTime")),
        cook_time=normalize_minutes(_first_present(raw, "cook_time", "cookTime")),
        servings=normalize_servings(raw.get("servings")),
        image_url=normalize_optional_text(_first_present(raw, "image", "image_url", "imageUrl")),
    )
    logger.info(
        "Normalized recipe: title=%s, ingredients=%d, steps=%d",
        recipe.title[:50],
        len(recipe.ingredients),
        len(recipe.instructions),
    )
    return recipe
