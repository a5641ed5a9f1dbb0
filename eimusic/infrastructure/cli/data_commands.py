"""Database commands: schema creation and demo data."""

import asyncio
from typing import Annotated

from rich.table import Table
import typer

from eimusic.config import get_logger, settings
from eimusic.infrastructure.cli.async_helpers import run_with_unit_of_work
from eimusic.infrastructure.cli.ui import command_error_handler, console
from eimusic.infrastructure.persistence.database.db_connection import reset_engine
from eimusic.infrastructure.persistence.database.db_models import init_db
from eimusic.infrastructure.persistence.seed import seed_demo_data

logger = get_logger(__name__)

SEED_LABELS = {
    "artists": "Artistas",
    "albums": "Álbuns",
    "tracks": "Faixas",
    "videos": "Vídeos",
    "users": "Usuários",
    "transactions": "Transações",
    "plans": "Planos",
}

app = typer.Typer(help="Gerenciar a base de dados", no_args_is_help=True)


async def _init_schema() -> None:
    try:
        await init_db()
    finally:
        await reset_engine()


@app.command("init")
@command_error_handler
def init_command() -> None:
    """Criar as tabelas (operação segura, não apaga dados)."""
    with console.status("[cyan]Criando tabelas...[/cyan]"):
        asyncio.run(_init_schema())
    console.print(
        f"[green]✓ Base de dados pronta[/green] [dim]{settings.database.url}[/dim]"
    )


@app.command("seed")
@command_error_handler
def seed_command(
    force: Annotated[
        bool,
        typer.Option("--force", help="Inserir mesmo se já houver artistas"),
    ] = False,
) -> None:
    """Carregar os dados de demonstração."""
    summary = run_with_unit_of_work(
        lambda uow: seed_demo_data(uow, force=force), "Carregando dados de demonstração..."
    )
    if summary.skipped:
        console.print(
            "[yellow]A base já tem artistas; nada foi inserido "
            "(use --force para inserir mesmo assim)[/yellow]"
        )
        return

    table = Table(title="Dados de demonstração", header_style="bold cyan")
    table.add_column("Tipo")
    table.add_column("Registros", justify="right", style="green")
    for kind, count in summary.counts.items():
        table.add_row(SEED_LABELS.get(kind, kind), str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{summary.total}[/bold]")
    console.print(table)
