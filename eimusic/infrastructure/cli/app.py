"""EiMusic CLI - Main application entry point and app structure."""

from importlib.metadata import version
from typing import Annotated

import typer

from eimusic.config import get_logger, log_startup_info, settings, setup_loguru_logger
from eimusic.infrastructure.cli import data_commands, media_commands
from eimusic.infrastructure.cli.browse_commands import register_browse_command
from eimusic.infrastructure.cli.content_commands import register_content_commands
from eimusic.infrastructure.cli.dashboard_commands import register_dashboard_commands
from eimusic.infrastructure.cli.ui import console

VERSION = version("eimusic")

logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 EiMusic Admin v{VERSION} - Administração da plataforma de música",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

register_content_commands(app)
register_browse_command(app)
register_dashboard_commands(app)

app.add_typer(
    data_commands.app,
    name="data",
    help="Criar tabelas e carregar dados de demonstração",
    rich_help_panel="⚙️ Sistema",
)
app.add_typer(
    media_commands.app,
    name="media",
    help="Enviar e remover imagens no Cloudinary",
    rich_help_panel="⚙️ Sistema",
)


@app.command(name="version", rich_help_panel="⚙️ Sistema")
def version_command() -> None:
    """Mostrar a versão."""
    console.print(
        f"[bold bright_blue]🎵 EiMusic Admin[/bold bright_blue] [dim]v{VERSION}[/dim]"
    )


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Saída detalhada (logs de depuração)"),
    ] = False,
) -> None:
    """Inicializar o CLI do EiMusic."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)
    if verbose:
        log_startup_info()

    settings.data_dir.mkdir(parents=True, exist_ok=True)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
