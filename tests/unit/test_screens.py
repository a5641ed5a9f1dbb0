"""Tests for screen configuration and screen-level record filtering."""

import pytest

from eimusic.application.screens import (
    EDITABLE_KINDS,
    SCREENS,
    TRACKS,
    ScreenConfig,
    get_screen,
    render_date,
    render_plan,
    render_status,
    titled_with,
)
from eimusic.application.use_cases import BrowseRecordsCommand, BrowseRecordsUseCase
from eimusic.application.use_cases.browse_records import filter_records
from eimusic.domain.errors import ValidationError
from eimusic.domain.listing import ColumnDefinition, FilterState, SortState


class TestScreenConfig:
    def test_every_kind_has_a_screen(self):
        assert set(SCREENS) == {
            "tracks",
            "albums",
            "artists",
            "videos",
            "users",
            "transactions",
            "plans",
        }
        assert set(EDITABLE_KINDS) < set(SCREENS)

    def test_searchable_fields_are_record_fields(self):
        for screen in SCREENS.values():
            assert screen.searchable_fields, screen.kind

    def test_unknown_kind(self):
        with pytest.raises(ValidationError, match="Unknown record kind"):
            get_screen("podcasts")

    def test_lookup_by_key_or_label(self):
        assert TRACKS.column("duration").label == "Duração"
        assert TRACKS.column_by_label("duração").key == "duration"
        assert TRACKS.filter("duration-max").type == "range"
        assert "duration-min" in TRACKS.filter_keys
        assert "status" not in TRACKS.sortable_keys

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            ScreenConfig(
                kind="x",
                title="X",
                columns=[ColumnDefinition("id", "ID"), ColumnDefinition("id", "Id")],
            )


class TestRenderers:
    def test_status_badge(self):
        assert render_status("published", {}) == "[green]Publicado[/green]"
        assert render_status(None, {}) == "-"

    def test_dates(self):
        assert render_date("2023-05-18", {}) == "18/05/2023"
        assert render_date("2023-08-15T00:00:00+00:00", {}) == "15/08/2023"
        assert render_date(None, {}) == "-"

    def test_record_text_is_escaped(self):
        render = titled_with("email")

        assert render("Remix [/dub]", {"email": "a[b]@x.co"}) == (
            "[bold]Remix \\[/dub][/bold]\n[dim]a\\[b]@x.co[/dim]"
        )
        assert render_status("[old]", {}) == "\\[old]"
        assert render_plan("gold [x]", {}) == "gold \\[x]"


class TestFilterRecords:
    def test_published_and_search_nita(self, track_records):
        state = FilterState({"status": "published"}, "nita")
        result = filter_records(TRACKS, state, track_records)
        assert [r["title"] for r in result] == ["Nita Famba"]

    def test_search_covers_album_title(self, track_records):
        result = filter_records(TRACKS, FilterState(search="evolução"), track_records)
        assert [r["title"] for r in result] == ["Eparaka"]

    def test_no_constraints_keeps_all(self, track_records):
        assert filter_records(TRACKS, FilterState(), track_records) == track_records


class TestBuildTable:
    def test_build_applies_filters_sort_and_page(self, track_records):
        command = BrowseRecordsCommand(
            kind="tracks",
            filters=FilterState({"status": "published"}),
            sort=SortState("duration", "desc"),
            page=2,
            page_size=2,
        )
        result = BrowseRecordsUseCase().build(TRACKS, track_records, command)

        assert result.total == 5
        assert result.filtered == 3
        assert result.table.current_page == 2
        assert [r["title"] for r in result.table.visible_rows] == ["Tsovani Wanga"]

    def test_page_must_be_positive(self):
        with pytest.raises(ValueError):
            BrowseRecordsCommand(kind="tracks", page=0)
