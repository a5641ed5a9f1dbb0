"""Logging configuration and utilities using Loguru.

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure console and file sinks

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log the active configuration once at startup

@resilient_operation(operation_name: str)
    Decorator for async boundary operations (database, media service)
"""

from collections.abc import Awaitable, Callable
import functools
from pathlib import Path
import sys
from typing import Any, ParamSpec, TypeVar

from loguru import logger
from sqlalchemy.engine import make_url

from .settings import settings

P = ParamSpec("P")
R = TypeVar("R")

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"service": "eimusic", "module": "root"})

    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | "
            "{extra[module]} | {name}:{function}:{line} | {message}"
        ),
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=not settings.logging.real_time_debug,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance bound to the given module.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Track created", track_id=12)
        ```
    """
    return logger.bind(module=name, service="eimusic")


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def _redact_url(url: str) -> str:
    """Database URL with its password masked."""
    return make_url(url).render_as_string(hide_password=True)


def log_startup_info() -> None:
    """Log a startup banner and every configuration value at debug level."""
    local_logger = get_logger(__name__)
    separator = "=" * 50

    local_logger.info(separator)
    local_logger.info("🎵 EiMusic Admin Console")
    local_logger.info(separator)

    local_logger.debug("Configuration:")
    for section_name, section_values in settings.model_dump().items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if "secret" in key or "api_key" in key:
                    value = "***" if value else ""
                elif key == "url" and value:
                    value = _redact_url(str(value))
                local_logger.debug("    {}: {}", key.upper(), str(value))
        else:
            local_logger.debug("    {}", str(section_values))


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


def resilient_operation(
    operation_name: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator for service boundary operations with standardized error logging.

    Exceptions are logged with their traceback and re-raised.

    Example:
        >>> @resilient_operation("cloudinary_upload")
        >>> async def upload(path):
        >>>     return await client.upload_image(path)
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator
