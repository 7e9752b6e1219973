import pytest
from fastapi.testclient import TestClient

from recipe_importer.app.api.deps import get_parser
from recipe_importer.app.main import create_app
from recipe_importer.app.services.recipe_parsing.models import ParsedIngredient, ParsedRecipe

CREDENTIAL_ENV_VARS = (
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "GEMINI_API_KEY",
    "RAPIDAPI_KEY",
    "FIRECRAWL_API_KEY",
)


class StubParser:
    """Stands in for RecipeParser behind the API; records the inputs it saw."""

    def __init__(self):
        self.recipe = ParsedRecipe(
            title="Weeknight Chili",
            ingredients=[ParsedIngredient(quantity="1", unit="lb", name="ground beef")],
            instructions=["Brown the beef.", "Simmer with beans."],
            cook_time=40,
        )
        self.error = None
        self.calls = []

    async def parse_recipe_from_url(self, url: str) -> ParsedRecipe:
        self.calls.append(("url", url))
        if self.error:
            raise self.error
        return self.recipe

    async def parse_recipe_from_text(self, text: str) -> ParsedRecipe:
        self.calls.append(("text", text))
        if self.error:
            raise self.error
        return self.recipe


@pytest.fixture
def clean_env(monkeypatch):
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stub_parser():
    return StubParser()


@pytest.fixture
def app(stub_parser):
    app = create_app()
    app.dependency_overrides[get_parser] = lambda: stub_parser
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
