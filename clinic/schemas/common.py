"""Shared response schemas."""

import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a listing."""

    items: list[T]
    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def build(cls, items: Sequence[T], total: int, page: int, size: int) -> "Page[T]":
        """Assemble a page, computing the page count from the total."""
        return cls(
            items=list(items),
            total=total,
            page=page,
            size=size,
            pages=math.ceil(total / size) if size else 0,
        )
