"""Page value object with navigation metadata."""

from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    content: List[T] = field(default_factory=list)
    page_index: int = 0
    page_size: int = 20
    total_elements: int = 0

    @classmethod
    def from_sequence(cls, items: Sequence[T], page_index: int, page_size: int) -> "Page[T]":
        """Slice one page out of a fully loaded, already ordered listing."""
        total = len(items)
        start = page_index * page_size
        if start >= total:
            return cls([], page_index, page_size, total)
        end = min(start + page_size, total)
        return cls(list(items[start:end]), page_index, page_size, total)

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size

    @property
    def total_pages(self) -> int:
        return -(-self.total_elements // self.page_size)

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def is_first(self) -> bool:
        return self.page_index == 0

    @property
    def is_last(self) -> bool:
        if self.total_pages == 0:
            return self.page_index == 0
        return self.page_index == self.total_pages - 1

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0
