"""Application lifecycle notifications."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ForegroundListener = Callable[[], Awaitable[None]]


class ForegroundRefreshError(Exception):
    """One or more listeners failed while handling a foreground transition."""

    def __init__(self, errors: list[Exception]) -> None:
        super().__init__(
            f"{len(errors)} foreground listener(s) failed: "
            + "; ".join(str(error) for error in errors)
        )
        self.errors = errors


@dataclass
class LifecycleEvents:
    """Fan-out hub for the host app's foreground transitions."""

    _listeners: list[ForegroundListener] = field(default_factory=list)

    def subscribe(self, listener: ForegroundListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def notify_foreground(self) -> None:
        """Invoke every listener in subscription order.

        A failing listener does not stop the others; failures are raised
        together once every listener has run.
        """
        errors: list[Exception] = []
        for listener in list(self._listeners):
            try:
                await listener()
            except Exception as exc:
                logger.exception("Foreground listener failed")
                errors.append(exc)
        if errors:
            raise ForegroundRefreshError(errors)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
