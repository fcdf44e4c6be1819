"""Pydantic schemas for recipe operations."""

import re
from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.config import settings
from domain.patch import RecipePatch

_LINK_SEPARATORS = re.compile(r"[\n,]")


def split_tags(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Comma-separated text (or a list) to at most ``max_tags`` trimmed tags."""
    if value is None:
        return None
    parts = value.split(",") if isinstance(value, str) else value
    tags = [t.strip() for t in parts if t and t.strip()]
    return tags[: settings.max_tags]


def split_links(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Newline- or comma-separated URLs (or a list) to at most ``max_source_urls``."""
    if value is None:
        return None
    parts = _LINK_SEPARATORS.split(value) if isinstance(value, str) else value
    links = [u.strip() for u in parts if u and u.strip()]
    return links[: settings.max_source_urls]


def split_lines(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """One ingredient per line; blank lines are dropped, order is kept."""
    if value is None:
        return None
    parts = value.splitlines() if isinstance(value, str) else value
    return [line.strip() for line in parts if line and line.strip()]


class _RecipeFields(BaseModel):
    description: Optional[str] = None
    cook_time_min: Optional[int] = Field(None, ge=0, le=10000)
    tags: Optional[Union[str, List[str]]] = None
    source_urls: Optional[Union[str, List[str]]] = None
    ingredients: Optional[Union[str, List[str]]] = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return split_tags(v)

    @field_validator("source_urls")
    @classmethod
    def normalize_links(cls, v):
        return split_links(v)

    @field_validator("ingredients")
    @classmethod
    def normalize_ingredients(cls, v):
        return split_lines(v)


class RecipeCreate(_RecipeFields):
    """New recipe. Tags, links and ingredients accept text or lists."""

    title: str = Field(..., min_length=1, max_length=300)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError("Please enter a title.")
        return v.strip()


class RecipeUpdate(_RecipeFields):
    """Partial recipe edit. Omitted fields are left alone, ``null`` clears them."""

    title: Optional[str] = Field(None, max_length=300)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    def to_patch(self) -> RecipePatch:
        return RecipePatch.from_values(self.model_dump(include=self.model_fields_set))


class RecipeSummary(BaseModel):
    recipe_id: UUID
    title: str
    description: Optional[str] = None
    cook_time_min: Optional[int] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RecipeResponse(RecipeSummary):
    owner_id: UUID
    source_urls: Optional[List[str]] = None
    ingredients: Optional[List[str]] = None
    image_path: Optional[str] = None
    updated_at: Optional[datetime] = None
