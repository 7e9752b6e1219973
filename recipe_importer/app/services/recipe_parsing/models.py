"""Pydantic models for recipe import parsing."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recipe_importer.app.services.recipe_parsing.constants import DEFAULT_RECIPE_TITLE


_DISPLAY_NAMES = {"tiktok": "TikTok", "youtube": "YouTube", "instagram": "Instagram"}


class PlatformTag(str, Enum):
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    BLOG = "blog"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self.value, self.value.capitalize())


class ParsedIngredient(BaseModel):
    """One ingredient line split into free-form quantity, unit and name."""

    name: str
    quantity: str = ""
    unit: str = ""


class ParsedRecipe(BaseModel):
    """A recipe in its final, validated shape.

    Optional fields are left as ``None`` internally and dropped on
    serialization, so consumers only ever see present values.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(DEFAULT_RECIPE_TITLE, min_length=1)
    description: Optional[str] = None
    ingredients: List[ParsedIngredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    prep_time: Optional[int] = Field(None, alias="prepTime", ge=0)
    cook_time: Optional[int] = Field(None, alias="cookTime", ge=0)
    servings: Optional[int] = Field(None, ge=1)
    image_url: Optional[str] = Field(None, alias="imageUrl")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class AcquiredContent(BaseModel):
    text: str
    thumbnail_url: Optional[str] = None
    strategy: str = "transcript"


class VideoMetadata(BaseModel):
    """Subset of an oEmbed payload."""

    title: str = ""
    thumbnail_url: Optional[str] = None


class BlogPageRecipe(BaseModel):
    """Structured recipe data as found on a blog page (schema.org markup)."""

    title: str = ""
    description: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = None
    image: Optional[str] = None


class ParseResult(BaseModel):
    """Result of a recipe parsing attempt."""

    success: bool
    recipe: Optional[Dict[str, Any]] = None
    platform: Optional[PlatformTag] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
