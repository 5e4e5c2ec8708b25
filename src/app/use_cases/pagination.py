"""
Pagination DTOs shared by list use cases.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PageRequest(BaseModel):
    """page is 1-based; limit is capped at MAX_LIMIT"""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(BaseModel, Generic[T]):
    items: List[T]
    pagination: Pagination

    @classmethod
    def build(cls, items: List[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            pagination=Pagination(
                page=request.page,
                limit=request.limit,
                total=total,
                pages=math.ceil(total / request.limit) if total else 0,
            ),
        )
