"""Rich rendering of ``DataTable`` and ``FilterBar`` state.

The views only read component state; every interaction goes back through
the components' own methods.
"""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from eimusic.application.filter_bar import ALL_LABEL, CLEAR_LABEL, FilterBar
from eimusic.application.table import EMPTY_DETAIL, DataTable
from eimusic.infrastructure.cli.ui import console

PREVIOUS_LABEL = "‹ Anterior"
NEXT_LABEL = "Próxima ›"


def build_rich_table(table: DataTable, title: str | None = None) -> Table:
    """Current page as a Rich table; the selected row is highlighted."""
    rich_table = Table(title=title, header_style="bold cyan", show_lines=False)
    rich_table.add_column("#", style="dim", justify="right")
    for column in table.columns:
        rich_table.add_column(table.header_label(column))

    for index, record in enumerate(table.visible_rows, 1):
        style = "bold reverse" if table.is_selected(record) else None
        cells = [str(cell) for cell in table.cells(record)]
        rich_table.add_row(str(index), *cells, style=style)
    return rich_table


def page_controls(table: DataTable) -> Text:
    """``‹ Anterior  1 [2] 3  Próxima ›`` with unavailable moves dimmed."""
    controls = Text()
    controls.append(PREVIOUS_LABEL, style="cyan" if table.has_previous else "dim")
    controls.append("  ")
    for number in table.page_numbers:
        if number == table.current_page:
            controls.append(f"[{number}]", style="bold reverse")
        else:
            controls.append(str(number), style="cyan")
        controls.append(" ")
    controls.append(" ")
    controls.append(NEXT_LABEL, style="cyan" if table.has_next else "dim")
    return controls


def empty_state(table: DataTable) -> Panel:
    body = Text.assemble(
        (table.empty_message, "bold"),
        "\n",
        (EMPTY_DETAIL, "dim"),
        justify="center",
    )
    return Panel(body, border_style="dim", expand=False)


def render_data_table(table: DataTable, title: str | None = None) -> RenderableType:
    if table.is_empty:
        return Group(
            Text(title or "", style="bold"),
            empty_state(table),
            Text(f"Página {table.page_indicator}", style="dim"),
        )
    return Group(
        build_rich_table(table, title),
        Text(table.caption, style="dim"),
        Text.assemble(page_controls(table), "   ", (f"Página {table.page_indicator}", "dim")),
    )


def display_data_table(table: DataTable, title: str | None = None) -> None:
    console.print(render_data_table(table, title))


def render_filter_bar(bar: FilterBar) -> RenderableType:
    """Search line, active filter summary and (when open) the filter panel."""
    search = bar.committed_search or "-"
    header = Text.assemble(
        ("Busca: ", "bold"),
        (search, "green" if bar.committed_search else "dim"),
    )
    if bar.draft != bar.committed_search:
        header.append(f"  (rascunho: {bar.draft})", style="yellow")

    summary = Text()
    labels = bar.active_labels()
    if labels:
        summary.append(f"Filtros ativos ({bar.active_count}): ", style="bold")
        summary.append(", ".join(f"{label}={value}" for label, value in labels))
        summary.append(f"  [{CLEAR_LABEL}: clear]", style="dim")
    else:
        summary.append("Nenhum filtro ativo", style="dim")

    if not bar.panel_open:
        return Group(header, summary)

    panel_table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    panel_table.add_column("Chave", style="cyan")
    panel_table.add_column("Filtro")
    panel_table.add_column("Valor", style="green")
    panel_table.add_column("Opções", style="dim")

    for definition in bar.filters:
        match definition.type:
            case "select":
                options = ", ".join(
                    f"{option.value or '(vazio)'}={option.label}"
                    for option in bar.select_options(definition)
                )
                value = bar.value_of(definition.key)
                panel_table.add_row(
                    definition.key,
                    definition.label,
                    definition.option_label(value) if value else ALL_LABEL,
                    options,
                )
            case "date":
                panel_table.add_row(
                    definition.key,
                    definition.label,
                    bar.value_of(definition.key) or "-",
                    "AAAA-MM-DD",
                )
            case "range":
                low_key, high_key = definition.range_keys
                panel_table.add_row(
                    f"{low_key} / {high_key}",
                    definition.label,
                    f"{bar.value_of(low_key) or '-'} .. {bar.value_of(high_key) or '-'}",
                    "número",
                )

    return Group(
        header,
        summary,
        Panel(panel_table, title="Filtros", border_style="blue", expand=False),
    )
