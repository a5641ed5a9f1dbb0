"""Injected publish/subscribe notification service.

Use cases publish user-facing success and error messages here; presentation
layers subscribe and decide how to show them. Every screen or command gets
its own ``NotificationCenter`` instance, so no listener state is global.
"""

from collections.abc import Callable
import itertools
from typing import Literal

from attrs import define, field, validators

from eimusic.config import get_logger

logger = get_logger(__name__)

NotificationLevel = Literal["success", "error", "warning", "info", "loading"]
NOTIFICATION_LEVELS: tuple[str, ...] = ("success", "error", "warning", "info", "loading")

# Milliseconds a notification stays visible; None keeps it until dismissed
DEFAULT_DURATIONS: dict[str, int | None] = {
    "success": 5000,
    "info": 5000,
    "warning": 7000,
    "error": 8000,
    "loading": None,
}

Listener = Callable[["Notification"], None]


@define(frozen=True, slots=True)
class Notification:
    """One message for the user."""

    id: str
    level: NotificationLevel = field(validator=validators.in_(NOTIFICATION_LEVELS))
    title: str
    message: str | None = None
    duration: int | None = None


class NotificationCenter:
    """Keeps the visible notifications and fans new ones out to subscribers."""

    def __init__(self, max_visible: int = 5) -> None:
        self._max_visible = max_visible
        self._listeners: list[Listener] = []
        self._active: list[Notification] = []
        self._ids = itertools.count(1)

    @property
    def active(self) -> list[Notification]:
        """Visible notifications, oldest first."""
        return list(self._active)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(
        self,
        level: NotificationLevel,
        title: str,
        message: str | None = None,
        duration: int | None = None,
    ) -> Notification:
        notification = Notification(
            id=f"notification-{next(self._ids)}",
            level=level,
            title=title,
            message=message,
            duration=duration if duration is not None else DEFAULT_DURATIONS[level],
        )
        self._active.append(notification)
        # Oldest notifications drop off once the limit is reached
        del self._active[: max(0, len(self._active) - self._max_visible)]

        logger.debug(f"Notification {notification.level}: {title}")
        for listener in list(self._listeners):
            listener(notification)
        return notification

    def success(self, title: str, message: str | None = None) -> Notification:
        return self.publish("success", title, message)

    def error(self, title: str, message: str | None = None) -> Notification:
        return self.publish("error", title, message)

    def warning(self, title: str, message: str | None = None) -> Notification:
        return self.publish("warning", title, message)

    def info(self, title: str, message: str | None = None) -> Notification:
        return self.publish("info", title, message)

    def dismiss(self, notification_id: str) -> None:
        self._active = [n for n in self._active if n.id != notification_id]
