"""Pydantic schemas for blog posts."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum

from pydantic import Field, computed_field, field_validator
from slugify import slugify

from folio.schemas.common import CamelModel, Pagination


class BlogStatus(str, Enum):
    """Blog post status."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class BlogInput(CamelModel):
    """Body for create and partial update.

    ``views``, ``publishedAt`` and identifiers are not accepted; unknown keys
    are dropped.
    """

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    tags: list[str] | None = None
    status: str | None = None
    author: str | None = None


class BlogSummary(CamelModel):
    """List view of a post (no content body)."""

    id: str
    title: str
    excerpt: str = ""
    tags: list[str] = Field(default_factory=list)
    status: BlogStatus
    author: str
    read_time: int
    views: int = 0
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value: object) -> object:
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value

    @computed_field
    @property
    def slug(self) -> str:
        return slugify(self.title, max_length=200)


class BlogOut(BlogSummary):
    content: str


class PopularTag(CamelModel):
    name: str
    count: int


class BlogPagination(Pagination):
    total_blogs: int


class BlogListResponse(CamelModel):
    success: bool = True
    data: list[BlogSummary]
    pagination: BlogPagination
    popular_tags: list[PopularTag]


class BlogResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: BlogOut


class BlogStats(CamelModel):
    total_blogs: int = 0
    published_blogs: int = 0
    draft_blogs: int = 0
    total_views: int = 0
    average_read_time: float = 0


class BlogStatsResponse(CamelModel):
    success: bool = True
    data: BlogStats
