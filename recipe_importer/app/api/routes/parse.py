import logging

from fastapi import APIRouter, Depends
from pydantic import AnyHttpUrl, BaseModel

from recipe_importer.app.api.deps import get_parser
from recipe_importer.app.services.recipe_parser import RecipeParser
from recipe_importer.app.services.recipe_parsing.models import ParseResult
from recipe_importer.app.services.recipe_parsing.url_classifier import classify_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes/parse", tags=["parse"])


class ParseUrlRequest(BaseModel):
    url: AnyHttpUrl


class ParseTextRequest(BaseModel):
    text: str


@router.post("/url", response_model=ParseResult, response_model_exclude_none=True)
async def parse_url_endpoint(payload: ParseUrlRequest, parser: RecipeParser = Depends(get_parser)):
    url = str(payload.url)
    recipe = await parser.parse_recipe_from_url(url)
    return ParseResult(success=True, recipe=recipe.to_payload(), platform=classify_url(url))


@router.post("/text", response_model=ParseResult, response_model_exclude_none=True)
async def parse_text_endpoint(payload: ParseTextRequest, parser: RecipeParser = Depends(get_parser)):
    recipe = await parser.parse_recipe_from_text(payload.text)
    return ParseResult(success=True, recipe=recipe.to_payload())
