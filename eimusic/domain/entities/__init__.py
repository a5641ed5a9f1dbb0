"""Core domain entities of the EiMusic catalog and accounts."""

from .accounts import (
    PLAN_STATUSES,
    TRANSACTION_STATUSES,
    TRANSACTION_TYPES,
    USER_PLANS,
    USER_STATUSES,
    MonetizationPlan,
    RevenueTransaction,
    User,
)
from .catalog import (
    ARTIST_PLANS,
    ARTIST_STATUSES,
    CONTENT_STATUSES,
    PAYMENT_METHODS,
    Album,
    Artist,
    Track,
    Video,
)
from .shared import Record, RecordValue, ensure_utc, to_record, to_record_value

__all__ = [
    "ARTIST_PLANS",
    "ARTIST_STATUSES",
    "CONTENT_STATUSES",
    "PAYMENT_METHODS",
    "PLAN_STATUSES",
    "TRANSACTION_STATUSES",
    "TRANSACTION_TYPES",
    "USER_PLANS",
    "USER_STATUSES",
    # Catalog
    "Album",
    "Artist",
    "Track",
    "Video",
    # Accounts
    "MonetizationPlan",
    "RevenueTransaction",
    "User",
    # Records
    "Record",
    "RecordValue",
    "ensure_utc",
    "to_record",
    "to_record_value",
]
