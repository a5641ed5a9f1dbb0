"""Tests for the FilterBar component."""

from unittest.mock import MagicMock

import pytest

from eimusic.application.filter_bar import ALL_LABEL, FilterBar
from eimusic.application.screens import TRACKS, USERS
from eimusic.domain.errors import ValidationError


@pytest.fixture
def callbacks():
    return {
        "on_search": MagicMock(),
        "on_filter_change": MagicMock(),
        "on_clear": MagicMock(),
    }


@pytest.fixture
def bar(callbacks):
    return FilterBar(TRACKS.filters, **callbacks)


class TestSearch:
    def test_typing_does_not_emit(self, bar, callbacks):
        bar.type_search("nit")
        bar.type_search("nita")

        callbacks["on_search"].assert_not_called()
        assert bar.draft == "nita"
        assert bar.committed_search == ""

    def test_submit_commits_current_draft(self, bar, callbacks):
        bar.type_search("nita")
        assert bar.submit_search() == "nita"

        callbacks["on_search"].assert_called_once_with("nita")
        assert bar.committed_search == "nita"
        assert bar.has_active


class TestControls:
    def test_select_change_emits_key_and_value(self, bar, callbacks):
        bar.set_filter("status", "published")

        callbacks["on_filter_change"].assert_called_once_with("status", "published")
        assert bar.values == {"status": "published"}
        assert bar.active_count == 1

    def test_empty_value_removes_constraint(self, bar, callbacks):
        bar.set_filter("status", "draft")
        bar.set_filter("status", "")

        assert callbacks["on_filter_change"].call_args.args == ("status", "")
        assert bar.active_count == 0

    def test_clear_single_filter(self, bar, callbacks):
        bar.set_filter("status", "draft")
        bar.set_filter("duration-min", "180")
        bar.clear_filter("status")

        assert bar.values == {"duration-min": "180"}
        callbacks["on_clear"].assert_not_called()

    def test_range_filter_uses_min_and_max_keys(self, bar):
        bar.set_filter("duration-min", "180")
        bar.set_filter("duration-max", "240")

        assert bar.values == {"duration-min": "180", "duration-max": "240"}
        assert bar.active_labels() == [
            ("Duração (s) mín", "180"),
            ("Duração (s) máx", "240"),
        ]

    def test_select_label_in_summary(self, bar):
        bar.set_filter("status", "published")
        assert bar.active_labels() == [("Status", "Publicado")]

    @pytest.mark.parametrize(
        ("key", "value", "message"),
        [
            ("status", "archived", "Invalid value"),
            ("release_date", "15/03/2024", "Invalid date"),
            ("duration-min", "long", "Invalid number"),
            ("genre", "pop", "Unknown filter"),
        ],
    )
    def test_invalid_input_rejected(self, bar, callbacks, key, value, message):
        with pytest.raises(ValidationError, match=message):
            bar.set_filter(key, value)
        callbacks["on_filter_change"].assert_not_called()

    def test_select_options_lead_with_all(self, callbacks):
        bar = FilterBar(USERS.filters, **callbacks)
        options = bar.select_options(bar.definition_for("plan"))

        assert options[0].value == ""
        assert options[0].label == ALL_LABEL
        assert [o.value for o in options[1:]] == ["free", "premium", "vip"]


class TestPanelAndClear:
    def test_toggle_panel(self, bar):
        assert bar.panel_open is False
        assert bar.toggle_panel() is True
        assert bar.toggle_panel() is False

    def test_clear_resets_everything_and_signals(self, bar, callbacks):
        bar.type_search("nita")
        bar.submit_search()
        bar.set_filter("status", "published")

        bar.clear()

        callbacks["on_clear"].assert_called_once_with()
        assert bar.draft == ""
        assert bar.committed_search == ""
        assert bar.values == {}
        assert not bar.has_active
