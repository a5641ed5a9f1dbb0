"""Image hosting commands backed by Cloudinary."""

from pathlib import Path
from typing import Annotated

import typer

from eimusic.infrastructure.cli.async_helpers import interactive_async_operation
from eimusic.infrastructure.cli.ui import console, display_key_values
from eimusic.infrastructure.media import CloudinaryClient

app = typer.Typer(help="Enviar e remover imagens", no_args_is_help=True)


@app.command("upload")
@interactive_async_operation()
async def upload_command(
    path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Arquivo de imagem"),
    ],
    folder: Annotated[
        str | None, typer.Option("--folder", help="Pasta no Cloudinary")
    ] = None,
) -> None:
    """Enviar uma imagem (máx. 10MB, recortada em 800x800)."""
    client = CloudinaryClient()
    with console.status("[cyan]Enviando imagem...[/cyan]"):
        image = await client.upload_image(path, folder)

    display_key_values(
        "Imagem enviada",
        [
            ("URL", image.url),
            ("Public ID", image.public_id),
            ("Dimensões", f"{image.width}x{image.height}" if image.width else None),
            ("Bytes", image.bytes),
        ],
        border_style="green",
    )


@app.command("delete")
@interactive_async_operation()
async def delete_command(
    target: Annotated[
        str, typer.Argument(help="URL da imagem ou public id")
    ],
) -> None:
    """Remover uma imagem hospedada."""
    client = CloudinaryClient()
    if await client.delete_image(target):
        console.print("[green]✓ Imagem removida[/green]")
    else:
        console.print("[yellow]⚠ A imagem não foi removida[/yellow]")
        raise typer.Exit(code=1)
