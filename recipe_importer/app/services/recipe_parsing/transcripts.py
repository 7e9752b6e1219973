"""Video transcript/caption providers.

Transcripts come from RapidAPI-hosted services. When no RapidAPI key is
configured an ``UnavailableTranscriptProvider`` is used instead, so callers
always talk to the same interface.
"""

import logging
from abc import ABC, abstractmethod
from urllib.parse import quote

import httpx

from recipe_importer.app.core.config import Settings
from recipe_importer.app.services.recipe_parsing.errors import TranscriptUnavailable
from recipe_importer.app.services.recipe_parsing.models import PlatformTag
from recipe_importer.app.services.recipe_parsing.url_classifier import extract_tiktok_id, extract_youtube_id

logger = logging.getLogger(__name__)

YOUTUBE_TRANSCRIPT_HOST = "youtube-transcripts.p.rapidapi.com"
TIKTOK_TRANSCRIPT_HOST = "tiktok-video-transcript.p.rapidapi.com"
TIKTOK_VIDEO_HOST = "tiktok-video-no-watermark2.p.rapidapi.com"


class TranscriptProvider(ABC):
    available = True

    @abstractmethod
    async def get_transcript(self, url: str, platform: PlatformTag) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class UnavailableTranscriptProvider(TranscriptProvider):
    available = False

    async def get_transcript(self, url: str, platform: PlatformTag) -> str:
        raise TranscriptUnavailable("Transcript extraction is not configured")


class RapidAPITranscriptProvider(TranscriptProvider):
    def __init__(self, api_key: str, timeout: float = 5.0):
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, host: str) -> dict:
        return {"X-RapidAPI-Key": self.api_key, "X-RapidAPI-Host": host}

    async def _get_json(self, host: str, path: str, url: str) -> dict:
        target = f"https://{host}{path}?url={quote(url, safe='')}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(target, headers=self._headers(host))
        if response.status_code >= 400:
            raise TranscriptUnavailable(f"{host} returned status {response.status_code}")
        data = response.json()
        return data if isinstance(data, dict) else {}

    async def get_transcript(self, url: str, platform: PlatformTag) -> str:
        if platform == PlatformTag.YOUTUBE:
            return await self._youtube_transcript(url)
        if platform == PlatformTag.TIKTOK:
            return await self._tiktok_transcript(url)
        raise TranscriptUnavailable(f"No transcript source for {platform.value}")

    async def _youtube_transcript(self, url: str) -> str:
        if not extract_youtube_id(url):
            raise TranscriptUnavailable("Invalid YouTube URL")
        data = await self._get_json(YOUTUBE_TRANSCRIPT_HOST, "/youtube/transcript", url)
        segments = data.get("content")
        if isinstance(segments, list):
            return " ".join(
                seg["text"] for seg in segments if isinstance(seg, dict) and isinstance(seg.get("text"), str)
            )
        raise TranscriptUnavailable("No transcript available for this video")

    async def _tiktok_transcript(self, url: str) -> str:
        """Combine the spoken transcript (steps) with the caption (often ingredients)."""
        if not extract_tiktok_id(url):
            raise TranscriptUnavailable("Invalid TikTok URL")
        spoken = ""
        caption = ""
        try:
            data = await self._get_json(TIKTOK_TRANSCRIPT_HOST, "/transcribe", url)
            if data.get("success") and isinstance(data.get("text"), str):
                spoken = data["text"]
        except (httpx.HTTPError, ValueError, TranscriptUnavailable) as exc:
            logger.info("TikTok spoken transcript unavailable: %s", exc)

        try:
            data = await self._get_json(TIKTOK_VIDEO_HOST, "/", url)
            video = data.get("data") if isinstance(data.get("data"), dict) else {}
            for key in ("title", "desc"):
                if isinstance(video.get(key), str) and video[key].strip():
                    caption = video[key]
                    break
        except (httpx.HTTPError, ValueError, TranscriptUnavailable) as exc:
            logger.info("TikTok caption unavailable: %s", exc)

        if spoken and caption:
            return f"VIDEO CAPTION (ingredients):\n{caption}\n\nSPOKEN INSTRUCTIONS:\n{spoken}"
        if spoken or caption:
            return spoken or caption
        raise TranscriptUnavailable("Could not get TikTok content")


def build_transcript_provider(settings: Settings) -> TranscriptProvider:
    if settings.rapidapi_key:
        return RapidAPITranscriptProvider(settings.rapidapi_key, timeout=settings.video_fetch_timeout_seconds)
    logger.info("RAPIDAPI_KEY not set; video transcripts disabled")
    return UnavailableTranscriptProvider()
