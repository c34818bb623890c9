"""Pydantic schemas for portfolio projects."""

from __future__ import annotations

import json
from datetime import datetime

from pydantic import Field, field_validator

from folio.schemas.common import CamelModel, Pagination


class ProjectInput(CamelModel):
    """Body for create and partial update.

    Every field is optional here so that missing required fields surface as
    the service's own input errors rather than a generic parse failure.
    """

    title: str | None = None
    category: str | None = None
    image: str | None = None
    description: str | None = None
    technologies: list[str] | None = None
    project_url: str | None = None
    github_url: str | None = None


class ProjectOut(CamelModel):
    id: str
    title: str
    category: str
    image: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    project_url: str | None = None
    github_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("technologies", mode="before")
    @classmethod
    def parse_technologies(cls, value: object) -> object:
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value


class ProjectPagination(Pagination):
    total_projects: int


class ProjectListResponse(CamelModel):
    success: bool = True
    data: list[ProjectOut]
    pagination: ProjectPagination


class ProjectResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: ProjectOut
