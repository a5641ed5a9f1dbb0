"""BrowseRecords use case: load one record kind and prepare its table.

Records are fetched once, filtered and searched through the listing engine,
and handed to a ``DataTable`` that owns sorting and pagination from then on.
"""

from collections.abc import Sequence

from attrs import define, field, validators

from eimusic.application.screens import ScreenConfig, get_screen
from eimusic.application.table import DataTable
from eimusic.config import get_logger, settings
from eimusic.domain.entities.shared import Record
from eimusic.domain.listing import (
    Accessor,
    FilterState,
    SortState,
    apply_filters,
    apply_search,
    create_pipeline,
)
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)


def _filter_accessors(screen: ScreenConfig) -> dict[str, Accessor]:
    accessors: dict[str, Accessor] = {}
    for definition in screen.filters:
        if definition.accessor is not None:
            accessors[definition.key] = definition.accessor
    return accessors


def _search_accessors(screen: ScreenConfig) -> dict[str, Accessor]:
    return {
        column.key: column.accessor
        for column in screen.columns
        if column.accessor is not None and column.key in screen.searchable_fields
    }


def filter_records(
    screen: ScreenConfig, filter_state: FilterState, records: Sequence[Record]
) -> list[Record]:
    """Apply a screen's filters, then its free-text search."""
    if not filter_state.has_constraints:
        return list(records)
    pipeline = create_pipeline(
        apply_filters(filter_state.values, accessors=_filter_accessors(screen)),
        apply_search(
            filter_state.search,
            screen.searchable_fields,
            accessors=_search_accessors(screen),
        ),
    )
    return pipeline(records)


@define(frozen=True, slots=True)
class BrowseRecordsCommand:
    """What to list and how the table should start out."""

    kind: str
    filters: FilterState = field(factory=FilterState)
    sort: SortState = field(factory=SortState)
    page: int = field(default=1, validator=validators.ge(1))
    page_size: int | None = None


@define(frozen=True, slots=True)
class BrowseResult:
    """Loaded records and the table built over the filtered subset."""

    screen: ScreenConfig
    records: list[Record]
    total: int
    table: DataTable

    @property
    def filtered(self) -> int:
        return self.table.total_count


@define(slots=True)
class BrowseRecordsUseCase:
    """Load every active record of a kind and build its table."""

    async def load(self, kind: str, uow: UnitOfWorkProtocol) -> list[Record]:
        """All active records of a kind as flat records."""
        async with uow:
            entities = await uow.get_repository(kind).list_active()
        return [entity.to_record() for entity in entities]

    async def execute(
        self, command: BrowseRecordsCommand, uow: UnitOfWorkProtocol
    ) -> BrowseResult:
        screen = get_screen(command.kind)
        records = await self.load(command.kind, uow)
        result = self.build(screen, records, command)

        logger.info(
            "Browsed records",
            kind=command.kind,
            total=result.total,
            filtered=result.filtered,
            page=result.table.current_page,
            active_filters=command.filters.active_count,
        )
        return result

    def build(
        self,
        screen: ScreenConfig,
        records: Sequence[Record],
        command: BrowseRecordsCommand,
    ) -> BrowseResult:
        """Filter already-loaded records and wrap them in a table."""
        candidates = filter_records(screen, command.filters, records)
        table = DataTable(
            candidates,
            screen.columns,
            command.page_size or settings.listing.page_size or screen.page_size,
            sort=command.sort,
            page=command.page,
            max_page_buttons=settings.listing.max_page_buttons,
            empty_message=screen.empty_message,
        )
        return BrowseResult(
            screen=screen, records=list(records), total=len(records), table=table
        )
