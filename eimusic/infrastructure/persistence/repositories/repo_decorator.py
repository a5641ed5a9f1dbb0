"""Repository decorator for standardizing DB operations.

Every repository method is wrapped with structured logging, timing and
classification of SQLAlchemy errors. Errors are always re-raised; the
decorator only decides how loudly they are logged.
"""

from collections.abc import Callable, Coroutine
import functools
import inspect
import time
from typing import Any, ParamSpec, TypeVar

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError,
)

from eimusic.config import get_logger
from eimusic.domain.errors import NotFoundError

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def db_operation(
    operation_name: str | None = None,
) -> Callable[[Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]]:
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        @db_operation("get_artist")
        async def get_by_id(self, entity_id: int) -> Artist:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(kwargs)

            def elapsed_ms() -> float:
                return (time.perf_counter() - start_time) * 1000

            try:
                logger.trace(
                    f"DB operation starting: {repo_name}.{func_name}",
                    operation=func_name,
                    **context,
                )
                result = await func(*args, **kwargs)
                logger.trace(
                    f"DB operation completed: {repo_name}.{func_name}",
                    operation=func_name,
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                return result

            except (NoResultFound, NotFoundError) as e:
                # Not found is an expected outcome
                logger.debug(
                    f"DB record not found: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except (MultipleResultsFound, IntegrityError) as e:
                logger.warning(
                    f"DB integrity error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except (TimeoutError, OperationalError) as e:
                logger.error(
                    f"DB operational error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except (DatabaseError, SQLAlchemyError) as e:
                logger.error(
                    f"DB error: {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

            except Exception as e:
                logger.exception(
                    f"Unhandled exception in {repo_name}.{func_name}",
                    operation=func_name,
                    error=str(e),
                    exec_time_ms=elapsed_ms(),
                    **context,
                )
                raise

        return wrapper

    return decorator


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Build a context dictionary for logging from function kwargs.

    IDs are kept; collections and private arguments are dropped.
    """
    id_params = {
        k: v
        for k, v in kwargs.items()
        if k.endswith("_id") and isinstance(v, int | str)
    }
    simple_params = {
        k: v
        for k, v in kwargs.items()
        if not k.startswith("_")
        and not isinstance(v, dict | list | set)
        and k not in id_params
    }
    return {**simple_params, **id_params}
