"""Shared schema plumbing: camelCase wire names and pagination blocks."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input and serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class DeletedRecord(CamelModel):
    id: str
    title: str | None = None
    name: str | None = None
    email: str | None = None


class DeleteResponse(CamelModel):
    success: bool = True
    message: str
    data: DeletedRecord


class MessageResponse(CamelModel):
    success: bool = True
    message: str
