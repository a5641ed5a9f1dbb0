"""Search box and filter panel component.

``FilterBar`` never touches records. It holds the search draft and the
values shown in each control, and reports every change to its owner, which
recomputes the visible records through the listing engine.
"""

from collections.abc import Callable, Sequence
from datetime import date

from eimusic.domain.errors import ValidationError
from eimusic.domain.listing import FilterDefinition, FilterOption

ALL_LABEL = "Todos"
CLEAR_LABEL = "Limpar tudo"

SearchHandler = Callable[[str], None]
FilterChangeHandler = Callable[[str, str], None]
ClearHandler = Callable[[], None]


class FilterBar:
    """Search draft, panel visibility and control values for one screen."""

    def __init__(
        self,
        filters: Sequence[FilterDefinition],
        *,
        on_search: SearchHandler,
        on_filter_change: FilterChangeHandler,
        on_clear: ClearHandler,
    ) -> None:
        self.filters: tuple[FilterDefinition, ...] = tuple(filters)
        self.on_search = on_search
        self.on_filter_change = on_filter_change
        self.on_clear = on_clear

        self.draft = ""
        self.committed_search = ""
        self.panel_open = False
        self._values: dict[str, str] = {}

    # --- Search ---

    def type_search(self, text: str) -> None:
        """Update the uncommitted draft; nothing is emitted."""
        self.draft = text

    def submit_search(self) -> str:
        """Commit the draft (Enter or the search button)."""
        self.committed_search = self.draft
        self.on_search(self.draft)
        return self.draft

    # --- Panel ---

    def toggle_panel(self) -> bool:
        self.panel_open = not self.panel_open
        return self.panel_open

    # --- Controls ---

    def definition_for(self, key: str) -> FilterDefinition:
        for definition in self.filters:
            if key in definition.state_keys:
                return definition
        known = ", ".join(k for d in self.filters for k in d.state_keys)
        raise ValidationError(f"Unknown filter {key!r}; available: {known or 'none'}")

    def select_options(self, definition: FilterDefinition) -> list[FilterOption]:
        """Options of a select control, led by the no-constraint choice."""
        return [FilterOption("", ALL_LABEL), *definition.options]

    def value_of(self, key: str) -> str:
        return self._values.get(key, "")

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def active_count(self) -> int:
        return len(self._values)

    @property
    def has_active(self) -> bool:
        return bool(self._values) or bool(self.committed_search.strip())

    def set_filter(self, key: str, value: str) -> None:
        """Change one control and emit ``(key, value)``.

        Raises:
            ValidationError: If the key belongs to no control or the value
                does not fit the control type
        """
        definition = self.definition_for(key)
        value = value.strip()
        if value:
            _check_value(definition, value)
            self._values[key] = value
        else:
            self._values.pop(key, None)
        self.on_filter_change(key, value)

    def clear_filter(self, key: str) -> None:
        self.set_filter(key, "")

    def clear(self) -> None:
        """Reset the search and every control, then signal the owner."""
        self.draft = ""
        self.committed_search = ""
        self._values.clear()
        self.on_clear()

    def active_labels(self) -> list[tuple[str, str]]:
        """``(label, display value)`` pairs summarising the active filters."""
        summary = []
        for key, value in self._values.items():
            definition = self.definition_for(key)
            label = definition.label
            if definition.type == "range":
                label = f"{label} {'mín' if key.endswith('-min') else 'máx'}"
            summary.append((label, definition.option_label(value)))
        return summary


def _check_value(definition: FilterDefinition, value: str) -> None:
    match definition.type:
        case "select":
            allowed = {option.value for option in definition.options}
            if allowed and value not in allowed:
                choices = ", ".join(sorted(allowed))
                raise ValidationError(
                    f"Invalid value {value!r} for {definition.key}; expected one of: {choices}"
                )
        case "date":
            try:
                date.fromisoformat(value)
            except ValueError:
                raise ValidationError(
                    f"Invalid date {value!r} for {definition.key}; use YYYY-MM-DD"
                ) from None
        case "range":
            try:
                float(value)
            except ValueError:
                raise ValidationError(
                    f"Invalid number {value!r} for {definition.key}"
                ) from None
