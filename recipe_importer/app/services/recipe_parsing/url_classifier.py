"""Map an input URL to the platform that can serve it."""

import re
from typing import Optional

from recipe_importer.app.services.recipe_parsing.constants import PLATFORM_DOMAINS
from recipe_importer.app.services.recipe_parsing.models import PlatformTag

_YOUTUBE_ID_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\s?]+)"),
    re.compile(r"youtube\.com/embed/([^&\s?]+)"),
    re.compile(r"youtube\.com/v/([^&\s?]+)"),
    re.compile(r"youtube\.com/shorts/([^&\s?]+)"),
)
_TIKTOK_ID_PATTERNS = (
    re.compile(r"tiktok\.com/@[\w.-]+/video/(\d+)"),
    re.compile(r"tiktok\.com/t/(\w+)"),
    re.compile(r"vm\.tiktok\.com/(\w+)"),
)


def classify_url(url: str) -> PlatformTag:
    """Return the platform for a URL; anything unrecognised is a blog."""
    lowered = (url or "").lower()
    for platform in (PlatformTag.TIKTOK, PlatformTag.INSTAGRAM, PlatformTag.YOUTUBE):
        if any(domain in lowered for domain in PLATFORM_DOMAINS[platform.value]):
            return platform
    return PlatformTag.BLOG


def _first_group(patterns, url: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


def extract_youtube_id(url: str) -> Optional[str]:
    return _first_group(_YOUTUBE_ID_PATTERNS, url)


def extract_tiktok_id(url: str) -> Optional[str]:
    return _first_group(_TIKTOK_ID_PATTERNS, url)
