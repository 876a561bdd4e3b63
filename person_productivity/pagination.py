"""Page requests and the page envelope returned by list queries."""

import math
from dataclasses import dataclass
from typing import Callable, Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .errors import ValidationError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """A 0-based page index and a page size.

    No upper bound is enforced here; the request layer caps the size.
    """

    page: int = 0
    size: int = 20

    def __post_init__(self):
        if self.page < 0:
            raise ValidationError("page", "Page index must not be negative")
        if self.size < 1:
            raise ValidationError("size", "Page size must be at least 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def slice(self, items: Sequence[T]) -> List[T]:
        """Cut this page out of an already ordered sequence."""
        return list(items[self.offset:self.offset + self.size])


class Page(BaseModel, Generic[T]):
    """Stable page envelope: ``{content, page, size, totalElements, totalPages}``."""

    content: List[T] = Field(default_factory=list, description="Records on this page")
    page: int = Field(..., description="0-based page index")
    size: int = Field(..., description="Requested page size")
    total_elements: int = Field(..., description="Number of records across all pages")
    total_pages: int = Field(..., description="Number of pages")

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def of(cls, content: Sequence[T], request: PageRequest, total_elements: int) -> "Page[T]":
        """Wrap one page of records together with the overall count."""
        return cls(
            content=list(content),
            page=request.page,
            size=request.size,
            total_elements=total_elements,
            total_pages=total_pages(total_elements, request.size),
        )

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Return a page with the same counts and each record converted by ``func``."""
        return Page(
            content=[func(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
            total_pages=self.total_pages,
        )


def total_pages(total_elements: int, size: int) -> int:
    """Number of pages needed for ``total_elements`` records; 0 when there are none."""
    if total_elements <= 0:
        return 0
    return math.ceil(total_elements / size)
