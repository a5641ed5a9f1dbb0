"""Static column and filter definitions for admin record tables.

Definitions are configuration data: every screen declares them once and they
are never mutated. Each one may carry a typed accessor decided at
configuration time; without one the record is read by key.
"""

from collections.abc import Callable
from typing import Any, Literal

from attrs import define, field, validators

from eimusic.domain.entities.shared import Record, RecordValue

FilterType = Literal["select", "date", "range"]
FILTER_TYPES: tuple[str, ...] = ("select", "date", "range")

RANGE_MIN_SUFFIX = "-min"
RANGE_MAX_SUFFIX = "-max"

Accessor = Callable[[Record], RecordValue]
# Renderers return whatever the presentation layer can display
CellRenderer = Callable[[RecordValue, Record], Any]


def read_field(record: Record, key: str, accessor: Accessor | None = None) -> RecordValue:
    """Read one field of a record through its accessor or by key."""
    if accessor is not None:
        return accessor(record)
    return record.get(key)


@define(frozen=True, slots=True)
class FilterOption:
    """One choice of a ``select`` filter."""

    value: str = field(validator=validators.instance_of(str))
    label: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class ColumnDefinition:
    """How one field of a record is displayed as a table column."""

    key: str = field(validator=[validators.instance_of(str), validators.min_len(1)])
    label: str = field(validator=validators.instance_of(str))
    sortable: bool = False
    render: CellRenderer | None = None
    accessor: Accessor | None = None

    def value_of(self, record: Record) -> RecordValue:
        return read_field(record, self.key, self.accessor)


@define(frozen=True, slots=True)
class FilterDefinition:
    """One filter control and the field it constrains."""

    key: str = field(validator=[validators.instance_of(str), validators.min_len(1)])
    label: str = field(validator=validators.instance_of(str))
    type: FilterType = field(default="select", validator=validators.in_(FILTER_TYPES))
    options: tuple[FilterOption, ...] = field(default=(), converter=tuple)
    accessor: Accessor | None = None

    def __attrs_post_init__(self) -> None:
        if self.options and self.type != "select":
            raise ValueError(f"Filter {self.key!r}: only select filters take options")

    @property
    def range_keys(self) -> tuple[str, str]:
        """Filter-state keys written by the two inputs of a range filter."""
        return f"{self.key}{RANGE_MIN_SUFFIX}", f"{self.key}{RANGE_MAX_SUFFIX}"

    @property
    def state_keys(self) -> tuple[str, ...]:
        """Every filter-state key this definition can write."""
        return self.range_keys if self.type == "range" else (self.key,)

    def option_label(self, value: str) -> str:
        """Display label for a select value, falling back to the raw value."""
        for option in self.options:
            if option.value == value:
                return option.label
        return value
