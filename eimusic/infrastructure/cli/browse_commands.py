"""Interactive browse shell for one record kind.

Records are loaded once; every command then drives the screen's
``FilterBar`` and ``DataTable`` and the visible page is recomputed from the
loaded records after each change.
"""

from collections.abc import Sequence
import shlex
from typing import Annotated

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
import typer

from eimusic.application.filter_bar import FilterBar
from eimusic.application.screens import SCREENS, ScreenConfig, get_screen
from eimusic.application.table import DataTable
from eimusic.application.use_cases import BrowseRecordsUseCase
from eimusic.application.use_cases.browse_records import filter_records
from eimusic.config import get_logger, settings
from eimusic.domain.entities.shared import Record
from eimusic.domain.errors import ValidationError
from eimusic.domain.listing import FilterState, SortState
from eimusic.infrastructure.cli.async_helpers import run_with_unit_of_work
from eimusic.infrastructure.cli.table_view import render_data_table, render_filter_bar
from eimusic.infrastructure.cli.ui import command_error_handler, console, display_key_values

logger = get_logger(__name__)

SHELL_HELP = """\
[yellow]/texto[/yellow]         buscar (Enter confirma a busca)
[yellow]f chave=valor[/yellow]  aplicar filtro (valor vazio remove)
[yellow]toggle[/yellow]         mostrar/ocultar painel de filtros
[yellow]sort COLUNA[/yellow]    ordenar (repita para inverter)
[yellow]n[/yellow] / [yellow]p[/yellow]          próxima / página anterior
[yellow]page N[/yellow]         ir para a página N
[yellow]open N[/yellow]         abrir a linha N da página
[yellow]clear[/yellow]          limpar busca e filtros
[yellow]q[/yellow]              sair"""


class BrowseSession:
    """Screen state for the shell: filter state, filter bar and table."""

    def __init__(
        self,
        screen: ScreenConfig,
        records: Sequence[Record],
        page_size: int | None = None,
    ) -> None:
        self.screen = screen
        self.records = list(records)
        self.filter_state = FilterState()
        self.opened: Record | None = None
        self.message: str | None = None

        self.filter_bar = FilterBar(
            screen.filters,
            on_search=self._on_search,
            on_filter_change=self._on_filter_change,
            on_clear=self._on_clear,
        )
        self.table = DataTable(
            filter_records(screen, self.filter_state, self.records),
            screen.columns,
            page_size or settings.listing.page_size,
            on_row_click=self._on_row_click,
            max_page_buttons=settings.listing.max_page_buttons,
            empty_message=screen.empty_message,
        )

    # --- Component callbacks ---

    def _recompute(self) -> None:
        self.table.set_records(filter_records(self.screen, self.filter_state, self.records))
        self.table.go_to_page(1)

    def _on_search(self, query: str) -> None:
        self.filter_state = self.filter_state.with_search(query)
        self._recompute()

    def _on_filter_change(self, key: str, value: str) -> None:
        self.filter_state = self.filter_state.with_value(key, value)
        self._recompute()

    def _on_clear(self) -> None:
        self.filter_state = self.filter_state.cleared()
        self._recompute()

    def _on_row_click(self, record: Record) -> None:
        self.opened = record

    # --- Commands ---

    def sort_by(self, name: str) -> SortState:
        column = self.screen.column(name) or self.screen.column_by_label(name)
        if column is None or not self.table.click_header(column.key):
            choices = ", ".join(self.screen.sortable_keys)
            raise ValidationError(f"Cannot sort by {name!r}; sortable columns: {choices}")
        return self.table.sort_state

    def handle(self, line: str) -> bool:
        """Apply one shell command; returns False when the user quits.

        Raises:
            ValidationError: For malformed commands and invalid filter values
        """
        self.opened = None
        self.message = None
        text = line.strip()
        if not text:
            return True

        if text.startswith("/"):
            self.filter_bar.type_search(text[1:].strip())
            self.filter_bar.submit_search()
            return True

        command, _, argument = text.partition(" ")
        argument = argument.strip()
        match command.lower():
            case "q" | "quit" | "exit":
                return False
            case "f" | "filter":
                key, sep, value = argument.partition("=")
                if not sep or not key.strip():
                    raise ValidationError("Use: f chave=valor")
                self.filter_bar.set_filter(key.strip(), value)
            case "toggle":
                self.filter_bar.toggle_panel()
            case "sort":
                if not argument:
                    raise ValidationError("Use: sort COLUNA")
                self.sort_by(_unquote(argument))
            case "n" | "next":
                self.table.next_page()
            case "p" | "prev":
                self.table.previous_page()
            case "page":
                self.table.go_to_page(_parse_int(argument, "page N"))
            case "open":
                row = _parse_int(argument, "open N")
                try:
                    self.table.click_row(row - 1)
                except IndexError as e:
                    raise ValidationError(str(e)) from e
            case "clear":
                self.filter_bar.clear()
            case "help" | "?":
                self.message = SHELL_HELP
            case _:
                raise ValidationError(f"Comando desconhecido: {command!r} (digite help)")
        return True


def _parse_int(argument: str, usage: str) -> int:
    try:
        return int(argument)
    except ValueError:
        raise ValidationError(f"Use: {usage}") from None


def _unquote(argument: str) -> str:
    parts = shlex.split(argument)
    return " ".join(parts) if parts else argument


def render_session(session: BrowseSession) -> None:
    console.print(render_filter_bar(session.filter_bar))
    console.print(render_data_table(session.table, session.screen.title))


def run_shell(session: BrowseSession) -> None:
    """Read-eval-render loop until ``q`` or end of input."""
    console.print(Panel(SHELL_HELP, title=session.screen.title, border_style="green", expand=False))
    render_session(session)

    while True:
        try:
            line = console.input("\n[bold bright_blue]>[/bold bright_blue] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        try:
            if not session.handle(line):
                break
        except ValidationError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
            continue

        if session.message:
            console.print(session.message)
        elif session.opened is not None:
            cells = [Text.from_markup(str(cell)) for cell in session.table.cells(session.opened)]
            display_key_values(
                session.screen.singular or session.screen.title,
                zip((column.label for column in session.table.columns), cells, strict=True),
            )
        else:
            render_session(session)

    logger.debug("Browse shell closed", kind=session.screen.kind)


def register_browse_command(app: typer.Typer) -> None:
    app.command(
        name="browse",
        help="Navegar registros interativamente (busca, filtros, ordenação)",
        rich_help_panel="🔎 Navegação",
    )(browse)


@command_error_handler
def browse(
    kind: Annotated[
        str, typer.Argument(help=f"Tipo de registro: {', '.join(SCREENS)}")
    ],
    page_size: Annotated[
        int | None, typer.Option("--page-size", min=1, help="Itens por página")
    ] = None,
) -> None:
    """Navegar registros interativamente."""
    screen = get_screen(kind)
    records = run_with_unit_of_work(lambda uow: BrowseRecordsUseCase().load(kind, uow))
    run_shell(BrowseSession(screen, records, page_size))
