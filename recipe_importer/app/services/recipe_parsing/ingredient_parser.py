"""Heuristic parsing of free-form ingredient lines ("1 cup flour")."""

import logging
import re

from recipe_importer.app.services.recipe_parsing.constants import UNIT_PATTERNS
from recipe_importer.app.services.recipe_parsing.models import ParsedIngredient

logger = logging.getLogger(__name__)

# quantity, optional unit (+ optional "of"), remainder as name
INGREDIENT_LINE_RE = re.compile(
    rf"^([\d./\s]+)?\s*(?:({'|'.join(UNIT_PATTERNS)})\b\.?)?\s*(?:of\s+)?(.+)$",
    re.I,
)
LEADING_QUANTITY_RE = re.compile(r"^([\d./\s]+)\s+(.+)$")


def parse_ingredient_line(line: str) -> ParsedIngredient:
    """Split one ingredient line into quantity, unit and name.

    Tiers: full quantity/unit/name pattern, then a leading-number pattern,
    then the whole line as the name. Never raises.
    """
    raw = line if isinstance(line, str) else str(line or "")
    text = raw.strip()

    match = INGREDIENT_LINE_RE.match(text)
    if match:
        return ParsedIngredient(
            quantity=(match.group(1) or "").strip(),
            unit=(match.group(2) or "").strip(),
            name=(match.group(3) or text).strip(),
        )

    match = LEADING_QUANTITY_RE.match(text)
    if match:
        logger.debug("Ingredient line matched leading-quantity fallback: %s", text[:50])
        return ParsedIngredient(quantity=match.group(1).strip(), unit="", name=match.group(2).strip())

    return ParsedIngredient(quantity="", unit="", name=text)
