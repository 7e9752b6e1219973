"""Acquire recipe text for a video URL.

Strategies run in order and stop at the first usable result:

1. transcript from the transcript provider (must be longer than 50 chars)
2. oEmbed title/thumbnail from the platform's metadata fetcher

A failing strategy is logged and skipped. Only when nothing usable is left
does acquisition fail, with ``NoContentExtracted``.
"""

import logging
from typing import Dict, Optional

from recipe_importer.app.services.recipe_parsing.constants import (
    MIN_CONTENT_CHARS,
    MIN_TRANSCRIPT_CHARS,
)
from recipe_importer.app.services.recipe_parsing.errors import NoContentExtracted
from recipe_importer.app.services.recipe_parsing.metadata import METADATA_FETCHERS, MetadataFetcher
from recipe_importer.app.services.recipe_parsing.models import AcquiredContent, PlatformTag
from recipe_importer.app.services.recipe_parsing.transcripts import TranscriptProvider

logger = logging.getLogger(__name__)


class ContentAcquirer:
    def __init__(
        self,
        transcripts: TranscriptProvider,
        metadata_fetchers: Optional[Dict[PlatformTag, MetadataFetcher]] = None,
        timeout: float = 5.0,
    ):
        self.transcripts = transcripts
        self.metadata_fetchers = metadata_fetchers if metadata_fetchers is not None else METADATA_FETCHERS
        self.timeout = timeout

    async def _try_transcript(self, url: str, platform: PlatformTag) -> Optional[AcquiredContent]:
        if not self.transcripts.available:
            logger.info("Transcript extraction not configured; skipping for %s", platform.value)
            return None
        logger.info("Attempting transcript extraction for %s video", platform.value)
        try:
            transcript = await self.transcripts.get_transcript(url, platform)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Transcript not available for %s: %s", url, exc, exc_info=True)
            return None
        if not isinstance(transcript, str):
            transcript = ""
        if len(transcript) <= MIN_TRANSCRIPT_CHARS:
            logger.info("Transcript for %s too short (%d chars); ignoring", url, len(transcript))
            return None
        logger.info("Got transcript: %d chars", len(transcript))
        return AcquiredContent(text=transcript, strategy="transcript")

    async def _try_metadata(self, url: str, platform: PlatformTag) -> Optional[AcquiredContent]:
        fetcher = self.metadata_fetchers.get(platform)
        if fetcher is None:
            logger.warning("No metadata fetcher registered for %s", platform.value)
            return None
        logger.info("Falling back to oEmbed metadata for %s", platform.value)
        try:
            metadata = await fetcher(url, self.timeout)
        except Exception as exc:  # noqa: BLE001
            logger.warning("oEmbed metadata not available for %s: %s", url, exc, exc_info=True)
            return None
        return AcquiredContent(
            text=metadata.title, thumbnail_url=metadata.thumbnail_url, strategy="metadata"
        )

    async def acquire(self, url: str, platform: PlatformTag) -> AcquiredContent:
        content = await self._try_transcript(url, platform)
        if content is None:
            content = await self._try_metadata(url, platform)

        if content is None or len(content.text) < MIN_CONTENT_CHARS:
            logger.warning("No usable content for %s video %s", platform.value, url)
            raise NoContentExtracted(platform.value)
        return content
