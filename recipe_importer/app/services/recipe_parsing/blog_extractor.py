"""Blog page fetching and structured recipe extraction.

Pages are fetched directly with httpx, or through Firecrawl when a
``FIRECRAWL_API_KEY`` is configured. Recipes are read from schema.org JSON-LD
markup; when a page has none, its readable text is offered for AI extraction.
"""

import ipaddress
import json
import logging
import re
from typing import List, Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from recipe_importer.app.core.config import Settings
from recipe_importer.app.services.recipe_parsing.constants import (
    BROWSER_HEADERS,
    MAX_PAGE_IMAGES,
    MAX_PAGE_TEXT_CHARS,
)
from recipe_importer.app.services.recipe_parsing.models import BlogPageRecipe
from recipe_importer.app.services.recipe_parsing.parsing_utils import (
    clean_text,
    extract_image,
    extract_instruction_text,
    parse_servings,
)

logger = logging.getLogger(__name__)

FIRECRAWL_SCRAPE_URL = "https://api.firecrawl.dev/v1/scrape"


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


def validate_page_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("Invalid URL")
    if is_private_host(parsed.hostname or ""):
        raise ValueError("URL points to a private or disallowed host")


def convert_to_print_url(url: str) -> str:
    """Rewrite known recipe sites to their print-friendly page."""
    parsed = urlparse(url)
    # eitanbernath.com: /2024/06/06/recipe-name/ -> /print/recipe-name
    if "eitanbernath.com" in (parsed.hostname or ""):
        match = re.search(r"/\d{4}/\d{2}/\d{2}/([^/]+)", parsed.path)
        if match:
            return f"{parsed.scheme}://{parsed.netloc}/print/{match.group(1)}"
    return url


def _ld_json_candidates(data) -> List[dict]:
    candidates = []
    if isinstance(data, dict) and "@graph" in data:
        graph = data.get("@graph") or []
        if isinstance(graph, list):
            candidates.extend(graph)
    if isinstance(data, list):
        candidates.extend(data)
    elif isinstance(data, dict):
        candidates.append(data)
    return [c for c in candidates if isinstance(c, dict)]


def _is_recipe(obj: dict) -> bool:
    obj_type = obj.get("@type")
    types = [obj_type] if isinstance(obj_type, str) else obj_type or []
    return isinstance(types, list) and any(str(t).lower() == "recipe" for t in types)


def _as_duration(value) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def extract_recipe_from_schema_org(html: str) -> Optional[BlogPageRecipe]:
    """Extract the first schema.org Recipe from JSON-LD blocks embedded in HTML."""
    soup = BeautifulSoup(html, "lxml")
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.info("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json:
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        for obj in _ld_json_candidates(data):
            if not _is_recipe(obj):
                continue
            raw_ingredients = obj.get("recipeIngredient") or obj.get("ingredients") or []
            if isinstance(raw_ingredients, str):
                raw_ingredients = [raw_ingredients]
            ingredients = [
                clean_text(item) for item in raw_ingredients if isinstance(item, str) and clean_text(item)
            ]
            steps = extract_instruction_text(obj.get("recipeInstructions") or [])
            title = obj.get("name")
            description = obj.get("description")

            logger.info(
                "Recipe candidate in block %d: title=%s, ingredients=%d, steps=%d",
                idx,
                str(title)[:50],
                len(ingredients),
                len(steps),
            )
            if not ingredients and not steps:
                logger.warning("Recipe candidate in block %d has no ingredients or steps", idx)
                continue
            return BlogPageRecipe(
                title=clean_text(title) if isinstance(title, str) else "",
                description=clean_text(description) if isinstance(description, str) else None,
                ingredients=ingredients,
                instructions=steps,
                prep_time=_as_duration(obj.get("prepTime")),
                cook_time=_as_duration(obj.get("cookTime")),
                servings=parse_servings(obj.get("recipeYield")),
                image=extract_image(obj.get("image")),
            )
    return None


def clean_soup_for_content(soup: BeautifulSoup) -> None:
    """Remove obvious boilerplate nodes before extracting candidate content."""
    for noisy in soup.find_all(["header", "footer", "nav", "aside", "form"]):
        noisy.decompose()
    for tag in soup.find_all(["script", "style", "noscript", "link", "meta"]):
        tag.decompose()


def find_main_node(soup: BeautifulSoup):
    """Find the main content node in the soup."""
    return (
        soup.find(attrs={"itemtype": re.compile("Recipe", re.I)})
        or soup.find("article")
        or soup.find("main")
        or soup.body
        or soup
    )


def extract_page_text(html: str) -> str:
    """Readable page text for AI extraction, followed by candidate image URLs."""
    soup = BeautifulSoup(html, "lxml")
    images = []
    for img in soup.find_all("img", src=True):
        src = img.get("src")
        if src and src not in images:
            images.append(src)
        if len(images) >= MAX_PAGE_IMAGES:
            break

    clean_soup_for_content(soup)
    main_node = find_main_node(soup)
    text = clean_text(main_node.get_text(" ", strip=True))
    if len(text) > MAX_PAGE_TEXT_CHARS:
        text = text[:MAX_PAGE_TEXT_CHARS] + "..."
    if text and images:
        text += "\n\nImages found on page:\n" + "\n".join(images)
    return text


class BlogContentProvider:
    def __init__(
        self,
        firecrawl_api_key: Optional[str] = None,
        timeout: float = 8.0,
        user_agent: str = "Mozilla/5.0",
    ):
        self.firecrawl_api_key = firecrawl_api_key
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlogContentProvider":
        return cls(
            firecrawl_api_key=settings.firecrawl_api_key,
            timeout=settings.page_fetch_timeout_seconds,
            user_agent=settings.scraper_user_agent,
        )

    async def _fetch_direct(self, url: str) -> str:
        headers = {"User-Agent": self.user_agent, **BROWSER_HEADERS}

        async def _try_fetch(extra_headers: Optional[dict] = None) -> httpx.Response:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, headers=headers | (extra_headers or {})
            ) as client:
                return await client.get(url)

        response = await _try_fetch()
        if response.status_code in {401, 403}:
            logger.info("Site returned %s for %s; retrying with relaxed headers", response.status_code, url)
            response = await _try_fetch({"Accept": "*/*"})
        if response.status_code >= 400:
            raise ValueError(f"Failed to fetch webpage: {response.status_code}")

        content_type = response.headers.get("content-type", "")
        if content_type and "text/html" not in content_type and "text/plain" not in content_type:
            raise ValueError(f"Unsupported content type: {content_type}")
        return response.text

    async def _fetch_firecrawl(self, url: str) -> str:
        payload = {"url": url, "formats": ["rawHtml"], "onlyMainContent": False}
        headers = {"Authorization": f"Bearer {self.firecrawl_api_key}", "Content-Type": "application/json"}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(FIRECRAWL_SCRAPE_URL, json=payload, headers=headers)
        if response.status_code >= 400:
            logger.error("Firecrawl returned status %s: %s", response.status_code, response.text[:500])
            raise ValueError(f"Firecrawl scrape failed: {response.status_code}")
        data = response.json()
        body = data.get("data") if isinstance(data, dict) else None
        html = body.get("rawHtml") if isinstance(body, dict) else None
        if not isinstance(html, str) or not html:
            raise ValueError("Firecrawl response missing rawHtml")
        return html

    async def fetch_page(self, url: str) -> str:
        """Fetch page HTML, trying the print-friendly URL first when one is known."""
        validate_page_url(url)
        fetch = self._fetch_firecrawl if self.firecrawl_api_key else self._fetch_direct
        print_url = convert_to_print_url(url)
        if print_url != url:
            try:
                return await fetch(print_url)
            except (httpx.HTTPError, ValueError) as exc:
                logger.info("Print URL %s failed (%s); using original URL", print_url, exc)
        return await fetch(url)

    def extract_page_recipe(self, html: str) -> Optional[BlogPageRecipe]:
        return extract_recipe_from_schema_org(html)

    def page_text(self, html: str) -> str:
        return extract_page_text(html)
