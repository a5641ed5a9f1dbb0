"""Tests for filter, sort and pagination state transitions."""

import pytest

from eimusic.domain.listing import (
    FilterDefinition,
    FilterOption,
    FilterState,
    PaginationState,
    SortState,
    clamp_page,
    total_pages,
)


class TestSortState:
    def test_new_field_starts_ascending(self):
        assert SortState().toggle("duration") == SortState("duration", "asc")

    def test_unsorted_by_default(self):
        assert not SortState().is_active
        assert SortState("title", "desc").is_active

    def test_same_field_flips_direction(self):
        state = SortState("duration", "asc").toggle("duration")
        assert state == SortState("duration", "desc")
        assert state.toggle("duration") == SortState("duration", "asc")

    def test_three_clicks_on_two_columns(self):
        state = SortState().toggle("title").toggle("title").toggle("plays")
        assert state.key == "plays"
        assert state.direction == "asc"

    def test_invalid_direction_rejected(self):
        with pytest.raises(ValueError):
            SortState("title", "up")


class TestFilterState:
    def test_empty_values_are_dropped(self):
        state = FilterState({"status": "published", "genre": "", "plan": "  "})
        assert state.values == {"status": "published"}

    def test_with_value_sets_and_removes(self):
        state = FilterState().with_value("status", "draft")
        assert state.values == {"status": "draft"}
        assert state.with_value("status", "").values == {}

    def test_transitions_return_new_objects(self):
        state = FilterState()
        changed = state.with_search("nita")
        assert state.search == ""
        assert changed.search == "nita"
        assert changed.has_constraints

    def test_cleared(self):
        state = FilterState({"status": "draft"}, "nita").cleared()
        assert state == FilterState()
        assert not state.has_constraints


class TestPagination:
    def test_total_pages_never_below_one(self):
        assert total_pages(0, 5) == 1
        assert total_pages(12, 5) == 3
        assert total_pages(10, 5) == 2

    def test_clamp_page(self):
        assert clamp_page(5, 12, 5) == 3
        assert clamp_page(-2, 12, 5) == 1

    def test_go_to_clamps(self):
        state = PaginationState(page_size=5).go_to(9, 12)
        assert state.current_page == 3
        assert state.clamped(4).current_page == 1

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            PaginationState(page_size=0)


class TestFilterDefinition:
    def test_range_filter_writes_two_keys(self):
        definition = FilterDefinition("duration", "Duração", "range")
        assert definition.state_keys == ("duration-min", "duration-max")

    def test_only_select_filters_take_options(self):
        with pytest.raises(ValueError, match="only select"):
            FilterDefinition("date", "Data", "date", [FilterOption("x", "X")])

    def test_option_label_falls_back_to_value(self):
        definition = FilterDefinition(
            "status", "Status", "select", [FilterOption("draft", "Rascunho")]
        )
        assert definition.option_label("draft") == "Rascunho"
        assert definition.option_label("other") == "other"
