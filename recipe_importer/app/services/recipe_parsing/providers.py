"""Hosted text-generation providers used for recipe extraction.

The provider is chosen once from configuration: Cloudflare Workers AI when
its account id and token are both set, otherwise Gemini when its key is set.
A configured provider that fails at request time does not fall through to
the other one.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from recipe_importer.app.core.config import Settings
from recipe_importer.app.services.recipe_parsing.errors import (
    InvalidProviderResponse,
    NoProviderConfigured,
    ProviderRequestFailed,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a recipe extraction assistant. Extract recipes and return only valid JSON."
MAX_OUTPUT_TOKENS = 2048


class GenerativeProvider(ABC):
    name = "generative"
    configured = True

    @abstractmethod
    async def complete(self, prompt: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError


def _check_status(provider: str, response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    logger.error(
        "%s returned status %s: %s",
        provider,
        response.status_code,
        response.text[:500],
    )
    raise ProviderRequestFailed(provider, response.status_code)


def _json_body(provider: str, response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.error("%s returned a non-JSON body: %s", provider, response.text[:200])
        raise InvalidProviderResponse() from exc


class CloudflareWorkersAIProvider(GenerativeProvider):
    name = "cloudflare"

    def __init__(self, account_id: str, api_token: str, model: str, timeout: float = 6.0):
        self.account_id = account_id
        self.api_token = api_token
        self.model = model
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"https://api.cloudflare.com/client/v4/accounts/{self.account_id}/ai/run/{self.model}"

    async def complete(self, prompt: str) -> str:
        payload = {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": MAX_OUTPUT_TOKENS,
        }
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Cloudflare AI request failed: %s", exc)
            raise ProviderRequestFailed(self.name) from exc

        _check_status(self.name, response)
        data = _json_body(self.name, response)
        if not isinstance(data, dict):
            data = {}
        result = data.get("result")
        text = result.get("response") if isinstance(result, dict) else None
        if not data.get("success") or not isinstance(text, str) or not text:
            logger.error("Invalid response from Cloudflare AI: %s", str(data)[:200])
            raise InvalidProviderResponse()
        return text


class GeminiProvider(GenerativeProvider):
    name = "gemini"

    def __init__(self, api_key: str, model: str, timeout: float = 6.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"

    async def complete(self, prompt: str) -> str:
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"maxOutputTokens": MAX_OUTPUT_TOKENS, "temperature": 0.1},
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed: %s", exc)
            raise ProviderRequestFailed(self.name) from exc

        _check_status(self.name, response)
        data = _json_body(self.name, response)
        text = _gemini_text(data)
        if not text:
            logger.error("Invalid response from Gemini: %s", str(data)[:200])
            raise InvalidProviderResponse()
        return text


def _gemini_text(data: Any) -> Optional[str]:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class UnconfiguredProvider(GenerativeProvider):
    name = "none"
    configured = False

    async def complete(self, prompt: str) -> str:
        raise NoProviderConfigured()


def resolve_provider(settings: Settings) -> GenerativeProvider:
    """Pick the generative provider from which credentials are present."""
    if settings.cloudflare_account_id and settings.cloudflare_api_token:
        logger.info("Using Cloudflare Workers AI (%s) for recipe extraction", settings.cloudflare_ai_model)
        return CloudflareWorkersAIProvider(
            settings.cloudflare_account_id,
            settings.cloudflare_api_token,
            settings.cloudflare_ai_model,
            timeout=settings.llm_timeout_seconds,
        )
    if settings.gemini_api_key:
        logger.info("Using Gemini (%s) for recipe extraction", settings.gemini_model)
        return GeminiProvider(
            settings.gemini_api_key,
            settings.gemini_model,
            timeout=settings.llm_timeout_seconds,
        )
    logger.warning("No generative provider configured; AI extraction will be unavailable")
    return UnconfiguredProvider()
