"""Recipe import entry points: URL (video or blog) and pasted text."""

import logging
from functools import lru_cache

import httpx

from recipe_importer.app.core.config import get_settings
from recipe_importer.app.services.recipe_parsing.ai_extractor import BLOG_PROMPT, RecipeExtractor
from recipe_importer.app.services.recipe_parsing.blog_extractor import BlogContentProvider
from recipe_importer.app.services.recipe_parsing.constants import (
    DEFAULT_RECIPE_TITLE,
    MIN_CONTENT_CHARS,
)
from recipe_importer.app.services.recipe_parsing.content_acquisition import ContentAcquirer
from recipe_importer.app.services.recipe_parsing.errors import (
    InputTooShort,
    NoContentExtracted,
    UnsupportedSource,
)
from recipe_importer.app.services.recipe_parsing.ingredient_parser import parse_ingredient_line
from recipe_importer.app.services.recipe_parsing.models import (
    BlogPageRecipe,
    ParsedRecipe,
    PlatformTag,
)
from recipe_importer.app.services.recipe_parsing.parsing_utils import parse_duration_minutes
from recipe_importer.app.services.recipe_parsing.providers import resolve_provider
from recipe_importer.app.services.recipe_parsing.transcripts import build_transcript_provider
from recipe_importer.app.services.recipe_parsing.url_classifier import classify_url

logger = logging.getLogger(__name__)

VIDEO_PLATFORMS = {PlatformTag.TIKTOK, PlatformTag.YOUTUBE, PlatformTag.INSTAGRAM}


def recipe_from_blog_page(page: BlogPageRecipe) -> ParsedRecipe:
    """Reshape structured blog data into a ParsedRecipe without AI."""
    ingredients = [parse_ingredient_line(line) for line in page.ingredients]
    servings = page.servings if page.servings and page.servings >= 1 else None
    return ParsedRecipe(
        title=page.title.strip() or DEFAULT_RECIPE_TITLE,
        description=page.description,
        ingredients=[ing for ing in ingredients if ing.name.strip()],
        instructions=[step.strip() for step in page.instructions if step.strip()],
        prep_time=parse_duration_minutes(page.prep_time),
        cook_time=parse_duration_minutes(page.cook_time),
        servings=servings,
        image_url=page.image or None,
    )


class RecipeParser:
    def __init__(
        self,
        extractor: RecipeExtractor,
        acquirer: ContentAcquirer,
        blog_provider: BlogContentProvider,
    ):
        self.extractor = extractor
        self.acquirer = acquirer
        self.blog_provider = blog_provider

    async def parse_recipe_from_url(self, url: str) -> ParsedRecipe:
        platform = classify_url(url)
        if platform == PlatformTag.BLOG:
            logger.info("Parsing recipe from blog URL: %s", url)
            return await self._parse_blog_recipe(url)
        if platform in VIDEO_PLATFORMS:
            return await self._parse_video_recipe(url, platform)
        raise UnsupportedSource()

    async def parse_recipe_from_text(self, text: str) -> ParsedRecipe:
        if not text or len(text.strip()) < MIN_CONTENT_CHARS:
            raise InputTooShort()
        return await self.extractor.extract(text.strip())

    async def _parse_video_recipe(self, url: str, platform: PlatformTag) -> ParsedRecipe:
        content = await self.acquirer.acquire(url, platform)
        logger.info(
            "Acquired %d chars for %s via %s", len(content.text), platform.value, content.strategy
        )
        recipe = await self.extractor.extract(content.text)
        if content.thumbnail_url and not recipe.image_url:
            recipe.image_url = content.thumbnail_url
        return recipe

    async def _parse_blog_recipe(self, url: str) -> ParsedRecipe:
        try:
            html = await self.blog_provider.fetch_page(url)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to fetch blog page %s: %s", url, exc)
            raise NoContentExtracted(PlatformTag.BLOG.value) from exc

        page = self.blog_provider.extract_page_recipe(html)
        if page is not None:
            logger.info("Using schema.org recipe markup for %s", url)
            return recipe_from_blog_page(page)

        text = self.blog_provider.page_text(html)
        if len(text) < MIN_CONTENT_CHARS:
            raise NoContentExtracted(PlatformTag.BLOG.value)
        logger.info("No recipe markup on %s; extracting from %d chars of page text", url, len(text))
        return await self.extractor.extract(text, prompt=BLOG_PROMPT)


@lru_cache
def get_recipe_parser() -> RecipeParser:
    """Build the parser once from settings; provider selection happens here."""
    settings = get_settings()
    return RecipeParser(
        extractor=RecipeExtractor(resolve_provider(settings)),
        acquirer=ContentAcquirer(
            build_transcript_provider(settings), timeout=settings.video_fetch_timeout_seconds
        ),
        blog_provider=BlogContentProvider.from_settings(settings),
    )


async def parse_recipe_from_url(url: str) -> ParsedRecipe:
    return await get_recipe_parser().parse_recipe_from_url(url)


async def parse_recipe_from_text(text: str) -> ParsedRecipe:
    return await get_recipe_parser().parse_recipe_from_text(text)
