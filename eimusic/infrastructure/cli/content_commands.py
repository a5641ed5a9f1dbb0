"""Record commands: list, show, create, update and delete for every screen.

One Typer sub-app is built per record kind (``eimusic tracks list``,
``eimusic artists create`` ...). Listing goes through the same use case and
``DataTable`` as the interactive browser; edits go through ManageContent and
report back through its notifications.
"""

from collections.abc import Sequence
from typing import Annotated

import typer

from eimusic.application.filter_bar import FilterBar
from eimusic.application.notifications import NotificationCenter
from eimusic.application.screens import (
    EDITABLE_KINDS,
    SCREENS,
    ScreenConfig,
    get_screen,
)
from eimusic.application.use_cases import (
    BrowseRecordsCommand,
    BrowseRecordsUseCase,
    CreateRecordCommand,
    DeleteRecordCommand,
    ManageContentUseCase,
    UpdateRecordCommand,
    editable_fields,
)
from eimusic.config import get_logger
from eimusic.domain.entities import to_record
from eimusic.domain.listing import FilterState, SortState
from eimusic.infrastructure.cli.async_helpers import run_with_unit_of_work
from eimusic.infrastructure.cli.table_view import display_data_table
from eimusic.infrastructure.cli.ui import (
    command_error_handler,
    console,
    display_key_values,
    display_notification,
    parse_assignments,
)

logger = get_logger(__name__)


def resolve_sort_key(screen: ScreenConfig, name: str) -> str:
    """Column key for ``--sort``, given either the key or the column label.

    Raises:
        typer.BadParameter: If no sortable column matches
    """
    column = screen.column(name) or screen.column_by_label(name)
    if column is None or not column.sortable:
        choices = ", ".join(screen.sortable_keys)
        raise typer.BadParameter(
            f"Cannot sort by {name!r}; sortable columns: {choices}", param_hint="--sort"
        )
    return column.key


def build_filter_state(
    screen: ScreenConfig, filters: Sequence[str], search: str = ""
) -> FilterState:
    """Validate ``--filter key=value`` options through the screen's filter bar.

    Raises:
        ValidationError: On unknown filter keys or values of the wrong type
    """
    state = FilterState(search=search)

    def on_change(key: str, value: str) -> None:
        nonlocal state
        state = state.with_value(key, value)

    bar = FilterBar(
        screen.filters,
        on_search=lambda _query: None,
        on_filter_change=on_change,
        on_clear=lambda: None,
    )
    for key, value in parse_assignments(filters, option="--filter").items():
        bar.set_filter(key, value)
    return state


def _record_rows(screen: ScreenConfig, record: dict) -> list[tuple[str, object]]:
    rows = []
    for key, value in record.items():
        column = screen.column(key)
        label = column.label if column is not None else key
        rows.append((label, value))
    return rows


def _notification_center() -> NotificationCenter:
    center = NotificationCenter()
    center.subscribe(display_notification)
    return center


def build_kind_app(kind: str) -> typer.Typer:
    """Sub-app with the commands available for one record kind."""
    screen = get_screen(kind)
    kind_app = typer.Typer(
        help=f"Gerenciar {screen.title.lower()}", no_args_is_help=True
    )

    @kind_app.command("list")
    @command_error_handler
    def list_records(
        search: Annotated[
            str, typer.Option("--search", "-s", help="Texto de busca")
        ] = "",
        filters: Annotated[
            list[str] | None,
            typer.Option("--filter", "-f", help="Filtro chave=valor (repetível)"),
        ] = None,
        sort: Annotated[
            str | None, typer.Option("--sort", help="Coluna para ordenar")
        ] = None,
        desc: Annotated[
            bool, typer.Option("--desc", help="Ordem decrescente")
        ] = False,
        page: Annotated[int, typer.Option("--page", "-p", min=1)] = 1,
        page_size: Annotated[
            int | None, typer.Option("--page-size", min=1, help="Itens por página")
        ] = None,
    ) -> None:
        """Listar registros com busca, filtros, ordenação e paginação."""
        sort_state = SortState()
        if desc and not sort:
            raise typer.BadParameter("--desc requires --sort", param_hint="--desc")
        if sort:
            sort_state = SortState(
                resolve_sort_key(screen, sort), "desc" if desc else "asc"
            )
        command = BrowseRecordsCommand(
            kind=kind,
            filters=build_filter_state(screen, filters or [], search),
            sort=sort_state,
            page=page,
            page_size=page_size,
        )
        result = run_with_unit_of_work(
            lambda uow: BrowseRecordsUseCase().execute(command, uow)
        )
        display_data_table(result.table, screen.title)
        if result.filtered != result.total:
            console.print(
                f"[dim]{result.filtered} de {result.total} registros "
                "correspondem aos filtros[/dim]"
            )

    @kind_app.command("show")
    @command_error_handler
    def show_record(
        record_id: Annotated[int, typer.Argument(help="ID do registro")],
    ) -> None:
        """Mostrar todos os campos de um registro."""
        entity = run_with_unit_of_work(
            lambda uow: ManageContentUseCase().get(kind, record_id, uow)
        )
        display_key_values(
            f"{screen.singular or screen.title} #{record_id}",
            _record_rows(screen, to_record(entity)),
        )

    if kind not in EDITABLE_KINDS:
        return kind_app

    fields_help = ", ".join(editable_fields(kind))

    @kind_app.command("create")
    @command_error_handler
    def create_record(
        values: Annotated[
            list[str],
            typer.Option("--set", help=f"Campo chave=valor. Campos: {fields_help}"),
        ],
    ) -> None:
        """Criar um registro."""
        use_case = ManageContentUseCase(_notification_center())
        command = CreateRecordCommand(kind, parse_assignments(values))
        result = run_with_unit_of_work(
            lambda uow: use_case.create(command, uow), "Salvando..."
        )
        console.print(f"[dim]ID: {result.record_id}[/dim]")

    @kind_app.command("update")
    @command_error_handler
    def update_record(
        record_id: Annotated[int, typer.Argument(help="ID do registro")],
        values: Annotated[
            list[str],
            typer.Option("--set", help=f"Campo chave=valor. Campos: {fields_help}"),
        ],
    ) -> None:
        """Atualizar campos de um registro."""
        use_case = ManageContentUseCase(_notification_center())
        command = UpdateRecordCommand(kind, record_id, parse_assignments(values))
        run_with_unit_of_work(lambda uow: use_case.update(command, uow), "Salvando...")

    @kind_app.command("delete")
    @command_error_handler
    def delete_record(
        record_id: Annotated[int, typer.Argument(help="ID do registro")],
        yes: Annotated[
            bool, typer.Option("--yes", "-y", help="Não pedir confirmação")
        ] = False,
    ) -> None:
        """Excluir um registro (exclusão lógica)."""
        label = (screen.singular or screen.title).lower()
        if not yes and not typer.confirm(
            f"Tem certeza que deseja excluir {label} #{record_id}? "
            "Esta ação não pode ser desfeita.",
            default=False,
        ):
            console.print("[yellow]Exclusão cancelada[/yellow]")
            raise typer.Exit()

        use_case = ManageContentUseCase(_notification_center())
        command = DeleteRecordCommand(kind, record_id)
        run_with_unit_of_work(lambda uow: use_case.delete(command, uow), "Excluindo...")

    return kind_app


def register_content_commands(app: typer.Typer) -> None:
    """Add one sub-app per record kind to the main app."""
    for kind, screen in SCREENS.items():
        panel = "🎵 Conteúdo" if kind in EDITABLE_KINDS else "💰 Receita"
        app.add_typer(
            build_kind_app(kind),
            name=kind,
            help=screen.title,
            rich_help_panel=panel,
        )

