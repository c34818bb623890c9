"""Offset pagination shared by every list endpoint."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


@dataclass
class Page(Generic[T]):
    """One page of records plus the total count of the same filter."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    def pagination(self) -> dict[str, int | bool]:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }
