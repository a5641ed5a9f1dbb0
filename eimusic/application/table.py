"""Record table component: local sort, pagination and row selection.

``DataTable`` receives the already filtered and searched records of a screen
and owns everything after that: which column is sorted, which page is shown
and which row was last clicked. It performs no I/O; renderers (the Rich
table view, tests) read its properties and forward user intent to its
methods.
"""

from collections.abc import Callable, Sequence

from rich.markup import escape

from eimusic.domain.entities.shared import Record, RecordValue
from eimusic.domain.listing import (
    ColumnDefinition,
    PaginationState,
    SortState,
    apply_sort,
    as_text,
    page_bounds,
    page_window,
    paginate,
)

EMPTY_TITLE = "Nenhum dado encontrado"
EMPTY_DETAIL = "Não há dados para exibir no momento."
MISSING_VALUE = "-"

SORT_INDICATORS = {"asc": "▲", "desc": "▼"}

RowClickHandler = Callable[[Record], None]
SortHandler = Callable[[SortState], None]
PageChangeHandler = Callable[[int], None]


def render_cell(column: ColumnDefinition, record: Record) -> object:
    """Cell markup: the custom renderer's result or the escaped stringified value."""
    value = column.value_of(record)
    if column.render is not None:
        return column.render(value, record)
    if value is None or value == "":
        return MISSING_VALUE
    return escape(as_text(value))


def result_caption(start: int, end: int, total: int) -> str:
    """``Mostrando 1 até 5 de 12 resultados``."""
    plural = "s" if total != 1 else ""
    return f"Mostrando {start} até {end} de {total} resultado{plural}"


class DataTable:
    """One screen's table over a candidate record sequence.

    Args:
        records: Full candidate sequence (filtered and searched, not paginated)
        columns: Column definitions in display order
        page_size: Rows per page
        on_row_click: Called with the clicked record
        on_sort: Called with the new sort state after a header click
        on_page_change: Called with the new page number when it changes
        sort: Initial sort state
        page: Initial page, clamped into range
        max_page_buttons: Size of the page-number window
        empty_message: Title shown instead of rows when there are none
    """

    def __init__(
        self,
        records: Sequence[Record],
        columns: Sequence[ColumnDefinition],
        page_size: int = 10,
        *,
        on_row_click: RowClickHandler | None = None,
        on_sort: SortHandler | None = None,
        on_page_change: PageChangeHandler | None = None,
        sort: SortState | None = None,
        page: int = 1,
        max_page_buttons: int = 5,
        empty_message: str = EMPTY_TITLE,
    ) -> None:
        self.columns: tuple[ColumnDefinition, ...] = tuple(columns)
        self.on_row_click = on_row_click
        self.on_sort = on_sort
        self.on_page_change = on_page_change
        self.max_page_buttons = max_page_buttons
        self.empty_message = empty_message

        self._records: list[Record] = list(records)
        self._sort = sort or SortState()
        self._pagination = PaginationState(page_size=page_size).go_to(
            page, len(self._records)
        )
        self._selected_id: RecordValue = None
        self._sorted: list[Record] = self._apply_sort()

    # --- Data ---

    def set_records(self, records: Sequence[Record]) -> None:
        """Replace the candidate records, keeping sort and clamping the page."""
        self._records = list(records)
        self._sorted = self._apply_sort()
        self._pagination = self._pagination.clamped(len(self._records))

    @property
    def records(self) -> list[Record]:
        """All candidate records in display order."""
        return list(self._sorted)

    @property
    def total_count(self) -> int:
        return len(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    # --- Sorting ---

    @property
    def sort_state(self) -> SortState:
        return self._sort

    def _apply_sort(self) -> list[Record]:
        if not self._sort.is_active:
            return list(self._records)
        column = self.column(self._sort.key)
        accessor = column.accessor if column is not None else None
        return apply_sort(accessor or self._sort.key, self._sort.direction, self._records)

    def column(self, key: str) -> ColumnDefinition | None:
        return next((c for c in self.columns if c.key == key), None)

    def click_header(self, key: str) -> bool:
        """Toggle sorting on a column header.

        Returns:
            False when the column is unknown or not sortable (nothing happens)
        """
        column = self.column(key)
        if column is None or not column.sortable:
            return False

        self._sort = self._sort.toggle(key)
        self._sorted = self._apply_sort()
        if self.on_sort is not None:
            self.on_sort(self._sort)
        return True

    def header_label(self, column: ColumnDefinition) -> str:
        """Column label with the direction indicator when it is the sort key."""
        if column.sortable and self._sort.key == column.key:
            return f"{column.label} {SORT_INDICATORS[self._sort.direction]}"
        return column.label

    # --- Pagination ---

    @property
    def page_size(self) -> int:
        return self._pagination.page_size

    @property
    def current_page(self) -> int:
        return self._pagination.current_page

    @property
    def total_pages(self) -> int:
        return self._pagination.total_pages(self.total_count)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def page_numbers(self) -> list[int]:
        return page_window(self.current_page, self.total_pages, self.max_page_buttons)

    def go_to_page(self, page: int) -> int:
        """Show ``page`` (clamped) and return the page actually shown."""
        previous = self.current_page
        self._pagination = self._pagination.go_to(page, self.total_count)
        if self.current_page != previous and self.on_page_change is not None:
            self.on_page_change(self.current_page)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    @property
    def visible_rows(self) -> list[Record]:
        return paginate(self.current_page, self.page_size, self._sorted)

    @property
    def caption(self) -> str:
        if self.is_empty:
            return self.empty_message
        start, end = page_bounds(self.current_page, self.page_size, self.total_count)
        return result_caption(start + 1, end, self.total_count)

    @property
    def page_indicator(self) -> str:
        return f"{self.current_page}/{self.total_pages}"

    # --- Rows ---

    @property
    def selected_id(self) -> RecordValue:
        return self._selected_id

    def is_selected(self, record: Record) -> bool:
        record_id = record.get("id")
        return record_id is not None and record_id == self._selected_id

    def click_row(self, index: int) -> Record:
        """Select the ``index``-th visible row (0-based) and notify the handler.

        Raises:
            IndexError: If no such row is visible
        """
        rows = self.visible_rows
        if not 0 <= index < len(rows):
            raise IndexError(f"Row {index + 1} is not on the current page")

        record = rows[index]
        if record.get("id") is not None:
            self._selected_id = record["id"]
        if self.on_row_click is not None:
            self.on_row_click(record)
        return record

    def cells(self, record: Record) -> list[object]:
        return [render_cell(column, record) for column in self.columns]
