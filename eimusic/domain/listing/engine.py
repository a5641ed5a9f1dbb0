"""
Pure filter, search, sort and paginate functions over in-memory records.

These functions never perform I/O and never mutate their input. Every one is
curried with the record sequence as the last argument, so screens can build
a pipeline once and run it after each state change:

    pipeline = create_pipeline(
        apply_filters(filter_state.values),
        apply_search(filter_state.search, ["title", "artist_name"]),
        apply_sort("duration", "desc"),
    )
    visible = pipeline(records)
"""

from collections.abc import Callable, Mapping, Sequence
import functools

from toolz import compose_left, curry

from eimusic.domain.entities.shared import Record, RecordValue
from eimusic.domain.listing.definitions import (
    RANGE_MAX_SUFFIX,
    RANGE_MIN_SUFFIX,
    Accessor,
    read_field,
)
from eimusic.domain.listing.state import SortDirection, clamp_page

RecordTransform = Callable[[Sequence[Record]], list[Record]]
SortKey = str | Accessor | None


def create_pipeline(*operations: RecordTransform) -> RecordTransform:
    """Compose record transforms left to right into a single operation."""
    return compose_left(*operations)


# === Value coercion ===


def as_text(value: RecordValue) -> str:
    """String form of a record value used for filtering and searching."""
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer():
            return str(int(value))
        case _:
            return str(value)


def _as_number(value: RecordValue | str) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    try:
        return float(value)
    except ValueError:
        return None


def _is_number(value: RecordValue) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


# === Filtering ===


def _range_bound(key: str) -> tuple[str, str] | None:
    """Split ``duration-min`` into ``("duration", "min")``."""
    for suffix, bound in ((RANGE_MIN_SUFFIX, "min"), (RANGE_MAX_SUFFIX, "max")):
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)], bound
    return None


def _matches(
    record: Record,
    key: str,
    expected: str,
    accessors: Mapping[str, Accessor],
) -> bool:
    bound = _range_bound(key)
    if bound is not None and key not in record:
        field_key, side = bound
        limit = _as_number(expected)
        if limit is None:
            # Unparseable bound: no constraint
            return True
        actual = _as_number(read_field(record, field_key, accessors.get(field_key)))
        if actual is None:
            return False
        return actual >= limit if side == "min" else actual <= limit

    return as_text(read_field(record, key, accessors.get(key))) == expected


@curry
def apply_filters(
    filter_values: Mapping[str, str],
    records: Sequence[Record],
    accessors: Mapping[str, Accessor] | None = None,
) -> list[Record]:
    """
    Keep records satisfying every active filter value.

    A record satisfies ``key=value`` when its field, coerced to a string,
    equals ``value`` exactly. Keys ending in ``-min``/``-max`` that are not
    record fields are numeric bounds on the base field (range filters).
    Empty values impose no constraint.

    Args:
        filter_values: Filter key to chosen value
        records: Records to filter
        accessors: Optional typed accessors by field key

    Returns:
        Matching records in input order
    """
    active = {key: value for key, value in filter_values.items() if value}
    if not active:
        return list(records)

    lookups = accessors or {}
    return [
        record
        for record in records
        if all(_matches(record, key, value, lookups) for key, value in active.items())
    ]


# === Searching ===


@curry
def apply_search(
    query: str,
    searchable_fields: Sequence[str],
    records: Sequence[Record],
    accessors: Mapping[str, Accessor] | None = None,
) -> list[Record]:
    """
    Keep records where at least one searchable field contains the query.

    Matching is a case-insensitive substring test on the string form of each
    field. An empty query returns the input unchanged.
    """
    if not query:
        return list(records)

    needle = query.lower()
    lookups = accessors or {}

    def hit(record: Record) -> bool:
        return any(
            needle in as_text(read_field(record, key, lookups.get(key))).lower()
            for key in searchable_fields
        )

    return [record for record in records if hit(record)]


# === Sorting ===


def compare_values(left: RecordValue, right: RecordValue) -> int:
    """Natural ordering: numeric when both are numbers, else by string."""
    if _is_number(left) and _is_number(right):
        return (left > right) - (left < right)  # type: ignore[operator]
    left_text, right_text = as_text(left), as_text(right)
    return (left_text > right_text) - (left_text < right_text)


@curry
def apply_sort(
    sort_key: SortKey,
    direction: SortDirection,
    records: Sequence[Record],
) -> list[Record]:
    """
    Stable sort of records by one field.

    Args:
        sort_key: Field name, typed accessor, or None to keep input order
        direction: "asc" or "desc"; "desc" reverses the comparator
        records: Records to order

    Returns:
        A new, ordered list. Records missing the field always sort last.
    """
    if sort_key is None:
        return list(records)

    if callable(sort_key):
        read = sort_key
    else:
        key_name = sort_key

        def read(record: Record) -> RecordValue:
            return record.get(key_name)

    sign = -1 if direction == "desc" else 1

    def comparator(left: Record, right: Record) -> int:
        left_value, right_value = read(left), read(right)
        if left_value is None or right_value is None:
            return (left_value is None) - (right_value is None)
        return sign * compare_values(left_value, right_value)

    return sorted(records, key=functools.cmp_to_key(comparator))


# === Pagination ===


def page_bounds(page: int, page_size: int, record_count: int) -> tuple[int, int]:
    """Half-open index range ``[start, end)`` of a clamped page."""
    current = clamp_page(page, record_count, page_size)
    start = (current - 1) * page_size
    return start, min(start + page_size, record_count)


@curry
def paginate(page: int, page_size: int, records: Sequence[Record]) -> list[Record]:
    """
    Slice one page out of the records.

    The requested page is clamped into ``[1, total_pages]`` first, so any
    page number yields a valid (possibly empty) slice.
    """
    start, end = page_bounds(page, page_size, len(records))
    return list(records[start:end])


def page_window(current_page: int, page_count: int, max_buttons: int = 5) -> list[int]:
    """
    Page numbers to offer as buttons: at most ``max_buttons``, centred on the
    current page and clamped to ``[1, page_count]``.
    """
    start = max(1, current_page - max_buttons // 2)
    end = start + max_buttons - 1
    if end > page_count:
        end = page_count
        start = max(1, end - max_buttons + 1)
    return list(range(start, end + 1))
