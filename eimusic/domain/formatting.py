"""Display helpers shared by the table renderers and the dashboard views.

Output follows the platform's Portuguese (Mozambique) conventions: dots as
thousands separators, amounts in meticais (MT) and relative times in
Portuguese.
"""

from datetime import UTC, datetime

from .entities.shared import ensure_utc


def format_duration(seconds: int | float | None) -> str:
    """Format a duration in seconds as ``m:ss``."""
    total = max(0, int(seconds or 0))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def group_thousands(value: int | float) -> str:
    """Integer part of ``value`` with dots between thousands: ``12500`` -> ``12.500``."""
    return f"{round(value):,}".replace(",", ".")


def format_compact_number(value: int | float | None) -> str:
    """Shorten large counts: ``1.2M``, ``45.6K``; smaller ones are grouped."""
    number = value or 0
    if number >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{number / 1_000:.1f}K"
    return group_thousands(number)


def format_currency(amount: int | float | None) -> str:
    """Whole meticais with grouped thousands: ``12.500 MT``."""
    return f"{group_thousands(amount or 0)} MT"


def format_percentage(value: float, digits: int = 1) -> str:
    """Signed percentage such as ``+12.5%`` or ``-3.0%``."""
    return f"{value:+.{digits}f}%"


def calculate_change(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``.

    Growth from zero is reported as 100%.
    """
    if previous == 0:
        return 100.0
    return (current - previous) / previous * 100


def relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago ``moment`` was, in Portuguese.

    Args:
        moment: Past timestamp; naive values are taken as UTC
        now: Reference time, defaults to the current UTC time

    Returns:
        ``agora``, ``há N min``, ``há Nh``, ``há N dia(s)`` within a week,
        otherwise the date as ``dd/mm/yyyy``.
    """
    moment = ensure_utc(moment)
    reference = ensure_utc(now) or datetime.now(UTC)

    minutes = int((reference - moment).total_seconds() // 60)
    if minutes < 1:
        return "agora"
    if minutes < 60:
        return f"há {minutes} min"

    hours = minutes // 60
    if hours < 24:
        return f"há {hours}h"

    days = hours // 24
    if days < 7:
        return f"há {days} dia{'s' if days > 1 else ''}"

    return moment.strftime("%d/%m/%Y")
