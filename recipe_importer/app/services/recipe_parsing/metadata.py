"""oEmbed metadata (title + thumbnail) for video URLs."""

import logging
from typing import Awaitable, Callable, Dict

import httpx

from recipe_importer.app.services.recipe_parsing.models import PlatformTag, VideoMetadata
from recipe_importer.app.services.recipe_parsing.url_classifier import extract_youtube_id

logger = logging.getLogger(__name__)

YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed"
TIKTOK_OEMBED_URL = "https://www.tiktok.com/oembed"

MetadataFetcher = Callable[[str, float], Awaitable[VideoMetadata]]


async def _fetch_oembed(endpoint: str, params: dict, timeout: float) -> VideoMetadata:
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(endpoint, params=params)
    if response.status_code >= 400:
        raise ValueError(f"oEmbed request to {endpoint} returned status {response.status_code}")
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError("oEmbed response is not an object")
    thumbnail = data.get("thumbnail_url")
    return VideoMetadata(
        title=data.get("title") if isinstance(data.get("title"), str) else "",
        thumbnail_url=thumbnail if isinstance(thumbnail, str) and thumbnail else None,
    )


async def fetch_youtube_metadata(url: str, timeout: float = 5.0) -> VideoMetadata:
    if not extract_youtube_id(url):
        raise ValueError("Invalid YouTube URL")
    return await _fetch_oembed(YOUTUBE_OEMBED_URL, {"url": url, "format": "json"}, timeout)


async def fetch_tiktok_metadata(url: str, timeout: float = 5.0) -> VideoMetadata:
    return await _fetch_oembed(TIKTOK_OEMBED_URL, {"url": url}, timeout)


async def fetch_instagram_metadata(url: str, timeout: float = 5.0) -> VideoMetadata:
    # Instagram's oEmbed requires app credentials; there is no unauthenticated path.
    raise ValueError(
        "Instagram recipe import is not yet supported. "
        "Please paste the recipe description manually or use a blog/YouTube URL."
    )


METADATA_FETCHERS: Dict[PlatformTag, MetadataFetcher] = {
    PlatformTag.YOUTUBE: fetch_youtube_metadata,
    PlatformTag.TIKTOK: fetch_tiktok_metadata,
    PlatformTag.INSTAGRAM: fetch_instagram_metadata,
}
