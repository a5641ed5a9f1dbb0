"""Async helpers for CLI commands to eliminate duplication."""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar, cast

from eimusic.domain.repositories import UnitOfWorkProtocol
from eimusic.infrastructure.cli.ui import command_error_handler, console
from eimusic.infrastructure.persistence.database.db_connection import reset_engine
from eimusic.infrastructure.persistence.database.db_models import init_db
from eimusic.infrastructure.persistence.unit_of_work import unit_of_work

T = TypeVar("T")


async def _with_unit_of_work(
    operation: Callable[[UnitOfWorkProtocol], Awaitable[T]],
) -> T:
    try:
        await init_db()
        async with unit_of_work() as uow:
            return await operation(uow)
    finally:
        # Each command runs on its own event loop; never reuse connections
        await reset_engine()


def run_with_unit_of_work(
    operation: Callable[[UnitOfWorkProtocol], Awaitable[T]],
    progress_text: str = "Carregando...",
) -> T:
    """Run one database operation on a fresh event loop with a spinner.

    The schema is created on first use, so every command works against an
    empty database file.
    """
    with console.status(f"[cyan]{progress_text}[/cyan]"):
        return asyncio.run(_with_unit_of_work(operation))


def interactive_async_operation() -> Callable[
    [Callable[..., Awaitable[Any]]], Callable[..., None]
]:
    """Decorator for async commands that manage their own output."""

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., None]:
        @command_error_handler
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            coro = func(*args, **kwargs)
            asyncio.run(cast("Coroutine[Any, Any, Any]", coro))

        return wrapper

    return decorator
