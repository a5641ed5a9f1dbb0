"""Tests for the DataTable component: sorting, pagination and row selection."""

from unittest.mock import MagicMock

import pytest
from rich.console import Console

from eimusic.application.screens import TRACKS
from eimusic.application.table import EMPTY_TITLE, DataTable, render_cell, result_caption
from eimusic.domain.listing import ColumnDefinition, SortState
from eimusic.infrastructure.cli.table_view import render_data_table

COLUMNS = [
    ColumnDefinition("id", "ID", sortable=True),
    ColumnDefinition("title", "Faixa", sortable=True),
    ColumnDefinition("plays", "Reproduções", sortable=True),
    ColumnDefinition("status", "Status"),
]


class TestPagination:
    def test_twelve_records_page_size_five(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, page_size=5)

        assert table.total_pages == 3
        assert [r["id"] for r in table.visible_rows] == [1, 2, 3, 4, 5]
        assert table.caption == "Mostrando 1 até 5 de 12 resultados"
        assert table.page_indicator == "1/3"
        assert not table.has_previous
        assert table.has_next

    def test_requesting_page_five_shows_page_three(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, page_size=5)

        assert table.go_to_page(5) == 3
        assert [r["id"] for r in table.visible_rows] == [11, 12]
        assert table.caption == "Mostrando 11 até 12 de 12 resultados"
        assert table.has_previous
        assert not table.has_next

    def test_next_and_previous(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, page_size=5)
        assert table.next_page() == 2
        assert table.next_page() == 3
        assert table.next_page() == 3
        assert table.previous_page() == 2

    def test_page_change_handler_only_on_change(self, twelve_records):
        on_page_change = MagicMock()
        table = DataTable(
            twelve_records, COLUMNS, page_size=5, on_page_change=on_page_change
        )
        table.go_to_page(2)
        table.go_to_page(2)
        table.previous_page()
        table.previous_page()

        assert [c.args[0] for c in on_page_change.call_args_list] == [2, 1]

    def test_page_numbers_window(self):
        records = [{"id": i} for i in range(1, 101)]
        table = DataTable(records, COLUMNS, page_size=10, page=6)
        assert table.page_numbers == [4, 5, 6, 7, 8]

    def test_set_records_clamps_current_page(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, page_size=5, page=3)
        table.set_records(twelve_records[:4])
        assert table.current_page == 1
        assert table.total_pages == 1


class TestEmptyState:
    def test_no_records(self):
        table = DataTable([], COLUMNS, page_size=5)

        assert table.is_empty
        assert table.visible_rows == []
        assert table.caption == EMPTY_TITLE
        assert table.page_indicator == "1/1"
        assert table.page_numbers == [1]

    def test_custom_empty_message(self):
        table = DataTable([], COLUMNS, empty_message="Nenhuma faixa encontrada")
        assert table.caption == "Nenhuma faixa encontrada"


class TestSorting:
    def test_clicking_duration_twice_toggles_direction(self, track_records):
        table = DataTable(track_records, TRACKS.columns, page_size=10)

        table.click_header("duration")
        assert table.sort_state == SortState("duration", "asc")
        assert [r["duration"] for r in table.visible_rows] == [198, 204, 227, 234, 265]

        table.click_header("duration")
        assert table.sort_state == SortState("duration", "desc")
        assert [r["duration"] for r in table.visible_rows] == [265, 234, 227, 204, 198]

    def test_header_label_shows_direction(self, track_records):
        table = DataTable(track_records, TRACKS.columns)
        duration = TRACKS.column("duration")
        assert table.header_label(duration) == "Duração"

        table.click_header("duration")
        assert table.header_label(duration) == "Duração ▲"
        table.click_header("duration")
        assert table.header_label(duration) == "Duração ▼"

    def test_three_clicks_on_two_columns(self, track_records):
        on_sort = MagicMock()
        table = DataTable(track_records, TRACKS.columns, on_sort=on_sort)

        table.click_header("title")
        table.click_header("title")
        table.click_header("streams")

        assert [c.args[0] for c in on_sort.call_args_list] == [
            SortState("title", "asc"),
            SortState("title", "desc"),
            SortState("streams", "asc"),
        ]

    def test_unsortable_column_is_ignored(self, track_records):
        on_sort = MagicMock()
        table = DataTable(track_records, TRACKS.columns, on_sort=on_sort)

        assert table.click_header("status") is False
        assert table.click_header("missing") is False
        assert table.sort_state == SortState()
        on_sort.assert_not_called()

    def test_sort_applies_across_pages(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, page_size=5)
        table.click_header("plays")
        table.click_header("plays")
        assert [r["id"] for r in table.visible_rows] == [12, 11, 10, 9, 8]

    def test_initial_sort_state(self, twelve_records):
        table = DataTable(twelve_records, COLUMNS, sort=SortState("id", "desc"))
        assert table.records[0]["id"] == 12


class TestRowSelection:
    def test_click_row_notifies_and_highlights(self, track_records):
        on_row_click = MagicMock()
        table = DataTable(track_records, TRACKS.columns, on_row_click=on_row_click)

        record = table.click_row(1)

        on_row_click.assert_called_once_with(record)
        assert record["title"] == "Tsovani Wanga"
        assert table.selected_id == 2
        assert table.is_selected(record)
        assert not table.is_selected(track_records[0])

    def test_click_row_outside_page(self, track_records):
        table = DataTable(track_records, TRACKS.columns, page_size=2)
        with pytest.raises(IndexError, match="Row 3"):
            table.click_row(2)

    def test_record_without_id_is_not_highlighted(self):
        table = DataTable([{"title": "x"}], COLUMNS)
        table.click_row(0)
        assert table.selected_id is None


class TestCells:
    def test_custom_renderer_and_missing_values(self, track_records):
        table = DataTable(track_records, TRACKS.columns)
        keys = [column.key for column in TRACKS.columns]
        cells = dict(zip(keys, table.cells(track_records[4]), strict=True))

        assert cells["duration"] == "3:24"
        assert cells["album_title"] == "-"
        assert cells["streams"] == "14.2K"

    def test_plain_values_are_stringified(self):
        assert render_cell(ColumnDefinition("n", "N"), {"n": 3.0}) == "3"

    def test_result_caption_singular(self):
        assert result_caption(1, 1, 1) == "Mostrando 1 até 1 de 1 resultado"

    def test_bracketed_text_is_kept_literally(self):
        record = {
            "id": 1,
            "title": "Remix [/dub]",
            "artist_name": "DJ [Tarico]",
            "album_title": "Hits [bold]",
            "duration": 200,
            "status": "published",
        }
        console = Console(record=True, width=200)

        console.print(render_data_table(DataTable([record], TRACKS.columns), "Faixas"))
        out = console.export_text()

        assert "Remix [/dub]" in out
        assert "DJ [Tarico]" in out
        assert "Hits [bold]" in out
