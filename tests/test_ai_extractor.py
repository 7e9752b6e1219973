import json

import httpx
import pytest

from recipe_importer.app.core.config import Settings
from recipe_importer.app.services.recipe_parsing import providers
from recipe_importer.app.services.recipe_parsing.ai_extractor import (
    BLOG_PROMPT,
    RECIPE_PROMPT,
    RecipeExtractor,
    extract_json_object,
    parse_ai_response,
)
from recipe_importer.app.services.recipe_parsing.errors import (
    InvalidProviderResponse,
    NoProviderConfigured,
    ProviderRequestFailed,
)

RECIPE_JSON = json.dumps(
    {
        "title": "Garlic Butter Shrimp",
        "ingredients": [{"name": "shrimp", "quantity": "1", "unit": "lb"}],
        "instructions": ["Melt butter.", "Cook shrimp."],
        "prep_time": 5,
        "cook_time": 10,
        "servings": 2,
    }
)


def make_fake_client(handler, calls):
    class FakeAsyncClient:
        def __init__(self, *args, **kwargs):
            self.kwargs = kwargs

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def post(self, url, **kwargs):
            calls.append((url, kwargs))
            return handler(url, **kwargs)

    return FakeAsyncClient


def test_extract_json_object_ignores_braces_inside_strings():
    text = 'Here you go: {"title": "Curly } brace {", "steps": ["a"]} and {"second": 1}'
    assert extract_json_object(text) == '{"title": "Curly } brace {", "steps": ["a"]}'


def test_extract_json_object_handles_fences_and_escapes():
    text = '```json\n{"title": "Say \\"hi\\" {", "nested": {"a": 1}}\n```'
    assert json.loads(extract_json_object(text)) == {"title": 'Say "hi" {', "nested": {"a": 1}}


def test_extract_json_object_none_when_unbalanced():
    assert extract_json_object('{"title": "Tacos"') is None
    assert extract_json_object("no json here") is None
    assert extract_json_object("") is None


def test_extract_json_object_skips_stray_closing_brace():
    assert extract_json_object('} oops {"a": 1}') == '{"a": 1}'


def test_parse_ai_response_errors():
    with pytest.raises(InvalidProviderResponse):
        parse_ai_response("I could not find a recipe.")
    with pytest.raises(InvalidProviderResponse):
        parse_ai_response("{title: 'not json'}")


@pytest.mark.asyncio
async def test_cloudflare_provider_sends_prompt_and_reads_response(monkeypatch):
    calls = []

    def handler(url, **kwargs):
        return httpx.Response(200, json={"success": True, "result": {"response": "Recipe: " + RECIPE_JSON}})

    monkeypatch.setattr(providers.httpx, "AsyncClient", make_fake_client(handler, calls))

    provider = providers.CloudflareWorkersAIProvider("acct", "token", "@cf/meta/test-model")
    recipe = await RecipeExtractor(provider).extract("shrimp video transcript")

    assert recipe.title == "Garlic Butter Shrimp"
    assert recipe.cook_time == 10
    url, kwargs = calls[0]
    assert url == "https://api.cloudflare.com/client/v4/accounts/acct/ai/run/@cf/meta/test-model"
    assert kwargs["headers"]["Authorization"] == "Bearer token"
    messages = kwargs["json"]["messages"]
    assert messages[0]["role"] == "system"
    assert messages[1]["content"] == RECIPE_PROMPT + "shrimp video transcript"


@pytest.mark.asyncio
async def test_cloudflare_non_2xx_raises_provider_failed(monkeypatch):
    calls = []
    monkeypatch.setattr(
        providers.httpx,
        "AsyncClient",
        make_fake_client(lambda url, **kw: httpx.Response(500, text="upstream exploded"), calls),
    )
    provider = providers.CloudflareWorkersAIProvider("acct", "token", "model")
    with pytest.raises(ProviderRequestFailed) as excinfo:
        await provider.complete("prompt")
    assert excinfo.value.provider == "cloudflare"
    assert excinfo.value.upstream_status == 500
    assert excinfo.value.error_code == "provider_failed"


@pytest.mark.asyncio
async def test_cloudflare_unsuccessful_body_is_invalid(monkeypatch):
    calls = []
    monkeypatch.setattr(
        providers.httpx,
        "AsyncClient",
        make_fake_client(lambda url, **kw: httpx.Response(200, json={"success": False, "errors": ["x"]}), calls),
    )
    provider = providers.CloudflareWorkersAIProvider("acct", "token", "model")
    with pytest.raises(InvalidProviderResponse):
        await provider.complete("prompt")


@pytest.mark.asyncio
async def test_network_error_becomes_provider_failed(monkeypatch):
    def handler(url, **kwargs):
        raise httpx.ConnectTimeout("timed out")

    monkeypatch.setattr(providers.httpx, "AsyncClient", make_fake_client(handler, []))
    provider = providers.GeminiProvider("key", "gemini-test")
    with pytest.raises(ProviderRequestFailed) as excinfo:
        await provider.complete("prompt")
    assert excinfo.value.upstream_status is None


@pytest.mark.asyncio
async def test_gemini_provider_reads_candidate_text(monkeypatch):
    calls = []

    def handler(url, **kwargs):
        body = {"candidates": [{"content": {"parts": [{"text": "```json\n" + RECIPE_JSON + "\n```"}]}}]}
        return httpx.Response(200, json=body)

    monkeypatch.setattr(providers.httpx, "AsyncClient", make_fake_client(handler, calls))

    provider = providers.GeminiProvider("secret", "gemini-test")
    recipe = await RecipeExtractor(provider).extract("page text", prompt=BLOG_PROMPT)

    assert recipe.servings == 2
    url, kwargs = calls[0]
    assert url.endswith("/models/gemini-test:generateContent")
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == BLOG_PROMPT + "page text"


@pytest.mark.asyncio
async def test_gemini_empty_candidates_is_invalid(monkeypatch):
    monkeypatch.setattr(
        providers.httpx,
        "AsyncClient",
        make_fake_client(lambda url, **kw: httpx.Response(200, json={"candidates": []}), []),
    )
    with pytest.raises(InvalidProviderResponse):
        await providers.GeminiProvider("key", "model").complete("prompt")


@pytest.mark.asyncio
async def test_unconfigured_provider_raises():
    with pytest.raises(NoProviderConfigured):
        await RecipeExtractor(providers.UnconfiguredProvider()).extract("some recipe content here")


def test_resolve_provider_prefers_cloudflare(clean_env):
    settings = Settings(
        _env_file=None,
        CLOUDFLARE_ACCOUNT_ID="acct",
        CLOUDFLARE_API_TOKEN="token",
        GEMINI_API_KEY="key",
    )
    assert isinstance(providers.resolve_provider(settings), providers.CloudflareWorkersAIProvider)


def test_resolve_provider_falls_back_to_gemini_when_cloudflare_incomplete(clean_env):
    settings = Settings(_env_file=None, CLOUDFLARE_ACCOUNT_ID="acct", GEMINI_API_KEY="key")
    provider = providers.resolve_provider(settings)
    assert isinstance(provider, providers.GeminiProvider)
    assert provider.timeout == settings.llm_timeout_seconds


def test_resolve_provider_unconfigured(clean_env):
    provider = providers.resolve_provider(Settings(_env_file=None))
    assert isinstance(provider, providers.UnconfiguredProvider)
    assert provider.configured is False


@pytest.mark.asyncio
async def test_configured_primary_failure_does_not_fail_over(monkeypatch, clean_env):
    calls = []
    monkeypatch.setattr(
        providers.httpx,
        "AsyncClient",
        make_fake_client(lambda url, **kw: httpx.Response(503, text="busy"), calls),
    )
    settings = Settings(
        _env_file=None,
        CLOUDFLARE_ACCOUNT_ID="acct",
        CLOUDFLARE_API_TOKEN="token",
        GEMINI_API_KEY="key",
    )
    extractor = RecipeExtractor(providers.resolve_provider(settings))
    with pytest.raises(ProviderRequestFailed):
        await extractor.extract("recipe content for the model")
    assert len(calls) == 1
    assert "cloudflare.com" in calls[0][0]


def test_parse_ai_response_oversized_integer_is_invalid():
    text = '{"title": "x", "servings": ' + "9" * 5000 + "}"
    with pytest.raises(InvalidProviderResponse):
        parse_ai_response(text)


def test_parse_ai_response_deep_nesting_is_invalid():
    text = '{"title": "x", "ingredients": ' + "[" * 100000 + "]" * 100000 + "}"
    with pytest.raises(InvalidProviderResponse):
        parse_ai_response(text)
