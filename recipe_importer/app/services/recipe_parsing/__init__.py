"""Recipe import parsing package.

This package turns a video URL, a blog URL or pasted text into a structured
recipe: content acquisition (transcripts, oEmbed metadata), schema.org
extraction for blog pages, and AI extraction with response normalization.
"""

from recipe_importer.app.services.recipe_parsing.ai_extractor import (
    RecipeExtractor,
    extract_json_object,
    parse_ai_response,
)
from recipe_importer.app.services.recipe_parsing.blog_extractor import (
    BlogContentProvider,
    extract_recipe_from_schema_org,
)
from recipe_importer.app.services.recipe_parsing.content_acquisition import ContentAcquirer
from recipe_importer.app.services.recipe_parsing.errors import (
    InputTooShort,
    InvalidProviderResponse,
    NoContentExtracted,
    NoProviderConfigured,
    ProviderRequestFailed,
    RecipeImportError,
    UnsupportedSource,
)
from recipe_importer.app.services.recipe_parsing.ingredient_parser import parse_ingredient_line
from recipe_importer.app.services.recipe_parsing.models import (
    AcquiredContent,
    ParsedIngredient,
    ParsedRecipe,
    ParseResult,
    PlatformTag,
)
from recipe_importer.app.services.recipe_parsing.normalizer import normalize_recipe
from recipe_importer.app.services.recipe_parsing.parsing_utils import (
    parse_duration_minutes,
    parse_iso8601_duration,
)
from recipe_importer.app.services.recipe_parsing.providers import (
    CloudflareWorkersAIProvider,
    GeminiProvider,
    GenerativeProvider,
    resolve_provider,
)
from recipe_importer.app.services.recipe_parsing.url_classifier import classify_url

__all__ = [
    # Models
    "AcquiredContent",
    "ParsedIngredient",
    "ParsedRecipe",
    "ParseResult",
    "PlatformTag",
    # Errors
    "InputTooShort",
    "InvalidProviderResponse",
    "NoContentExtracted",
    "NoProviderConfigured",
    "ProviderRequestFailed",
    "RecipeImportError",
    "UnsupportedSource",
    # Acquisition and extraction
    "BlogContentProvider",
    "ContentAcquirer",
    "RecipeExtractor",
    "classify_url",
    "extract_json_object",
    "extract_recipe_from_schema_org",
    "parse_ai_response",
    # Providers
    "CloudflareWorkersAIProvider",
    "GeminiProvider",
    "GenerativeProvider",
    "resolve_provider",
    # Parsing utilities
    "normalize_recipe",
    "parse_duration_minutes",
    "parse_ingredient_line",
    "parse_iso8601_duration",
]
