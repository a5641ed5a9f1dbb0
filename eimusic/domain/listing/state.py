"""Immutable UI state for record tables: filters, search, sort and page.

Every transition returns a new state object; screens keep the latest one and
recompute the visible slice from scratch after each change.
"""

from collections.abc import Mapping
import math
from typing import Literal

import attrs
from attrs import define, field, validators

SortDirection = Literal["asc", "desc"]


def _clean_values(values: Mapping[str, str] | None) -> dict[str, str]:
    return {key: value for key, value in (values or {}).items() if value and value.strip()}


@define(frozen=True, slots=True)
class FilterState:
    """Chosen filter values plus the committed free-text search.

    Empty or absent values impose no constraint and are dropped on the way in.
    """

    values: dict[str, str] = field(factory=dict, converter=_clean_values)
    search: str = field(default="", converter=lambda s: s or "")

    def with_value(self, key: str, value: str | None) -> "FilterState":
        """Set one filter value; an empty value removes the constraint."""
        new_values = dict(self.values)
        if value and value.strip():
            new_values[key] = value
        else:
            new_values.pop(key, None)
        return attrs.evolve(self, values=new_values)

    def with_search(self, query: str | None) -> "FilterState":
        return attrs.evolve(self, search=query or "")

    def cleared(self) -> "FilterState":
        return FilterState()

    @property
    def active_count(self) -> int:
        return len(self.values)

    @property
    def has_constraints(self) -> bool:
        return bool(self.values) or bool(self.search.strip())


@define(frozen=True, slots=True)
class SortState:
    """The active sort key (if any) and its direction.

    Selecting the active field flips the direction; selecting another field
    makes it active in ascending order.
    """

    key: str | None = None
    direction: SortDirection = field(
        default="asc", validator=validators.in_(("asc", "desc"))
    )

    def toggle(self, key: str) -> "SortState":
        if self.key == key:
            return SortState(key, "desc" if self.direction == "asc" else "asc")
        return SortState(key, "asc")

    @property
    def is_active(self) -> bool:
        return self.key is not None


def total_pages(record_count: int, page_size: int) -> int:
    """Number of pages for ``record_count`` records; never less than one."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(record_count / page_size))


def clamp_page(page: int, record_count: int, page_size: int) -> int:
    """Clamp a requested page into ``[1, total_pages]``."""
    return max(1, min(page, total_pages(record_count, page_size)))


@define(frozen=True, slots=True)
class PaginationState:
    """Current page (1-based) and the fixed page size."""

    page_size: int = field(validator=[validators.instance_of(int), validators.ge(1)])
    current_page: int = field(default=1, validator=validators.instance_of(int))

    def total_pages(self, record_count: int) -> int:
        return total_pages(record_count, self.page_size)

    def go_to(self, page: int, record_count: int) -> "PaginationState":
        """Move to ``page``, clamped into the valid range."""
        return attrs.evolve(
            self, current_page=clamp_page(page, record_count, self.page_size)
        )

    def clamped(self, record_count: int) -> "PaginationState":
        return self.go_to(self.current_page, record_count)
