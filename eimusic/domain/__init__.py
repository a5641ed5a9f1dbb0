"""EiMusic domain layer - pure business logic with zero I/O."""

from . import entities, formatting, listing

from .entities import (
    Album,
    Artist,
    MonetizationPlan,
    Record,
    RecordValue,
    RevenueTransaction,
    Track,
    User,
    Video,
)
from .errors import EiMusicError, MediaUploadError, NotFoundError, ValidationError
from .listing import (
    ColumnDefinition,
    FilterDefinition,
    FilterOption,
    FilterState,
    PaginationState,
    SortState,
    apply_filters,
    apply_search,
    apply_sort,
    create_pipeline,
    paginate,
)

__all__ = [
    # Modules
    "entities",
    "formatting",
    "listing",
    # Entities
    "Album",
    "Artist",
    "MonetizationPlan",
    "Record",
    "RecordValue",
    "RevenueTransaction",
    "Track",
    "User",
    "Video",
    # Errors
    "EiMusicError",
    "MediaUploadError",
    "NotFoundError",
    "ValidationError",
    # Listing
    "ColumnDefinition",
    "FilterDefinition",
    "FilterOption",
    "FilterState",
    "PaginationState",
    "SortState",
    "apply_filters",
    "apply_search",
    "apply_sort",
    "create_pipeline",
    "paginate",
]
