"""Application use cases orchestrating repositories and listing state."""

from .analytics import (
    AnalyticsCommand,
    AnalyticsResult,
    AnalyticsUseCase,
    MonthlyPoint,
    StatsCard,
)
from .browse_records import (
    BrowseRecordsCommand,
    BrowseRecordsUseCase,
    BrowseResult,
    filter_records,
)
from .dashboard import (
    ActivityItem,
    DashboardCommand,
    DashboardResult,
    DashboardUseCase,
    SmartStats,
)
from .manage_content import (
    ContentResult,
    CreateRecordCommand,
    DeleteRecordCommand,
    ManageContentUseCase,
    UpdateRecordCommand,
    editable_fields,
)
from .monetization import (
    MonetizationResult,
    MonetizationUseCase,
    PlanStats,
    TransactionSummary,
)

__all__ = [
    # Analytics
    "AnalyticsCommand",
    "AnalyticsResult",
    "AnalyticsUseCase",
    "MonthlyPoint",
    "StatsCard",
    # Browsing
    "BrowseRecordsCommand",
    "BrowseRecordsUseCase",
    "BrowseResult",
    "filter_records",
    # Dashboard
    "ActivityItem",
    "DashboardCommand",
    "DashboardResult",
    "DashboardUseCase",
    "SmartStats",
    # Content
    "ContentResult",
    "CreateRecordCommand",
    "DeleteRecordCommand",
    "ManageContentUseCase",
    "UpdateRecordCommand",
    "editable_fields",
    # Monetization
    "MonetizationResult",
    "MonetizationUseCase",
    "PlanStats",
    "TransactionSummary",
]
