"""Generic filter, search, sort and paginate support for record tables."""

from .definitions import (
    FILTER_TYPES,
    RANGE_MAX_SUFFIX,
    RANGE_MIN_SUFFIX,
    Accessor,
    CellRenderer,
    ColumnDefinition,
    FilterDefinition,
    FilterOption,
    FilterType,
    read_field,
)
from .engine import (
    RecordTransform,
    apply_filters,
    apply_search,
    apply_sort,
    as_text,
    compare_values,
    create_pipeline,
    page_bounds,
    page_window,
    paginate,
)
from .state import (
    FilterState,
    PaginationState,
    SortDirection,
    SortState,
    clamp_page,
    total_pages,
)

__all__ = [
    "FILTER_TYPES",
    "RANGE_MAX_SUFFIX",
    "RANGE_MIN_SUFFIX",
    # Definitions
    "Accessor",
    "CellRenderer",
    "ColumnDefinition",
    "FilterDefinition",
    "FilterOption",
    "FilterType",
    "read_field",
    # Engine
    "RecordTransform",
    "apply_filters",
    "apply_search",
    "apply_sort",
    "as_text",
    "compare_values",
    "create_pipeline",
    "page_bounds",
    "page_window",
    "paginate",
    # State
    "FilterState",
    "PaginationState",
    "SortDirection",
    "SortState",
    "clamp_page",
    "total_pages",
]
