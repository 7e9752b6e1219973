"""AI-based structured recipe extraction."""

import json
import logging
import re
from typing import Any, Optional

from recipe_importer.app.services.recipe_parsing.errors import InvalidProviderResponse
from recipe_importer.app.services.recipe_parsing.models import ParsedRecipe
from recipe_importer.app.services.recipe_parsing.normalizer import normalize_recipe
from recipe_importer.app.services.recipe_parsing.providers import GenerativeProvider

logger = logging.getLogger(__name__)

RECIPE_PROMPT = """Extract the recipe from this video transcript, description, or recipe text. Return ONLY valid JSON with no additional text.

The JSON should have this exact structure:
{
  "title": "Recipe name",
  "description": "Brief description of the dish",
  "ingredients": [
    {"name": "ingredient name", "quantity": "1", "unit": "cup"}
  ],
  "instructions": ["Step 1 description", "Step 2 description"],
  "prep_time": 10,
  "cook_time": 20,
  "servings": 4
}

Rules:
- For ingredients, separate quantity, unit, and name
- Instructions should be clear, actionable steps
- prep_time and cook_time are in minutes (integers only)
- If you cannot determine a value, omit that field entirely instead of guessing

Content to extract from:
"""

BLOG_PROMPT = """Extract the recipe from this webpage content. Return ONLY valid JSON with no additional text.

The JSON should have this exact structure:
{
  "title": "Recipe name",
  "ingredients": ["1 cup flour", "2 eggs"],
  "instructions": ["Step 1 description", "Step 2 description"],
  "prep_time": 15,
  "cook_time": 30,
  "servings": 4,
  "image": "https://example.com/image.jpg"
}

Rules:
- Extract all ingredients as strings with quantities included
- Extract all instruction steps as separate strings
- prep_time and cook_time are in minutes (integers only)
- If you cannot determine a value, omit that field entirely instead of guessing
- Pick the main recipe image URL from the listed images if one fits
- Focus on the main recipe, ignore sidebar recipes or related recipes

Webpage content:
"""

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*|\s*```$")


def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of text, if any.

    Braces inside JSON strings are ignored, so commentary before or after the
    object (or a code fence around it) does not affect the result.
    """
    if not text:
        return None
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    start = cleaned.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for idx in range(start, len(cleaned)):
            char = cleaned[idx]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return cleaned[start : idx + 1]
        start = cleaned.find("{", start + 1)
    return None


def parse_ai_response(text: str) -> Any:
    """Locate and decode the JSON object inside a provider's free-text answer."""
    snippet = extract_json_object(text)
    if snippet is None:
        logger.error("No JSON found in AI response: %s", (text or "")[:200])
        raise InvalidProviderResponse()
    try:
        return json.loads(snippet)
    except (ValueError, RecursionError) as exc:
        logger.error("AI response JSON parse error: %s (first 200 chars: %s)", exc, snippet[:200])
        raise InvalidProviderResponse() from exc


class RecipeExtractor:
    """Send content to the configured provider and normalize what comes back."""

    def __init__(self, provider: GenerativeProvider):
        self.provider = provider

    async def extract(self, content: str, prompt: str = RECIPE_PROMPT) -> ParsedRecipe:
        logger.info(
            "Extracting recipe with %s from %d chars of content", self.provider.name, len(content)
        )
        raw_text = await self.provider.complete(prompt + content)
        logger.debug("AI raw content (truncated): %s", raw_text[:1000])
        return normalize_recipe(parse_ai_response(raw_text))
