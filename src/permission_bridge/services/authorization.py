"""Permission authorization bridge.

Turns a callback-driven OS permission API into a single awaitable
``authorize()`` call per capability. Only one OS prompt is ever in flight
per bridge; callers arriving while it is outstanding either queue behind it
or are rejected, depending on the configured concurrency mode.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from permission_bridge.domain.authorization import (
    AuthorizationState,
    AuthorizationStatus,
    Capability,
)
from permission_bridge.domain.errors import (
    AuthorizationPendingError,
    AuthorizationTimeoutError,
    UnsupportedStatusError,
)
from permission_bridge.services.lifecycle import LifecycleEvents

logger = logging.getLogger(__name__)

StatusListener = Callable[[AuthorizationStatus], None]


class PermissionPlatform(Protocol):
    """OS-side permission API for a single capability."""

    async def current_status(self) -> AuthorizationStatus:
        """Return the status the OS currently reports."""

    async def request_access(self) -> None:
        """Show the OS permission prompt; the answer arrives via listeners."""

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a status-change listener and return an unsubscribe callable."""


class SettingsOpener(Protocol):
    """Deep link into the system Settings app."""

    async def open_settings(self) -> None:
        """Open the Settings app. Fire-and-forget."""


class ConcurrencyMode(str, Enum):
    """How a bridge treats callers that arrive while a prompt is pending."""

    QUEUE = "queue"
    REJECT = "reject"


@dataclass
class AuthorizationBridge:
    """Caches one capability's authorization state and mediates prompts."""

    capability: Capability
    platform: PermissionPlatform
    settings_opener: SettingsOpener
    lifecycle: LifecycleEvents | None = None
    concurrency: ConcurrencyMode = ConcurrencyMode.QUEUE
    timeout_seconds: float | None = None
    _state: AuthorizationState = field(init=False)
    _waiters: deque[asyncio.Future[AuthorizationState]] = field(
        init=False, default_factory=deque
    )
    _in_flight: bool = field(init=False, default=False)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)
    _unsubscribers: list[Callable[[], None]] = field(
        init=False, default_factory=list
    )

    def __post_init__(self) -> None:
        self._state = AuthorizationState(
            capability=self.capability, value=AuthorizationStatus.NOT_DETERMINED
        )
        self._unsubscribers.append(self.platform.subscribe(self.handle_status_change))
        if self.lifecycle is not None:
            self._unsubscribers.append(
                self.lifecycle.subscribe(self.handle_foreground)
            )

    @property
    def state(self) -> AuthorizationState:
        """Return the cached state without asking the platform."""
        return self._state

    @property
    def is_pending(self) -> bool:
        """Return True while an OS prompt is outstanding."""
        return self._in_flight

    @property
    def waiter_count(self) -> int:
        return len(self._waiters)

    async def refresh(self) -> AuthorizationState:
        """Re-read the platform status into the cache."""
        return self._apply(await self.platform.current_status())

    async def authorize(self) -> AuthorizationState:
        """Return a decided state, prompting the user at most once."""
        async with self._lock:
            if self._in_flight:
                if self.concurrency is ConcurrencyMode.REJECT:
                    logger.warning(
                        "Rejected concurrent authorization request",
                        extra={"capability": self.capability.value},
                    )
                    raise AuthorizationPendingError(self.capability)
                waiter = self._enqueue()
            else:
                state = await self.refresh()
                if state.is_sufficient:
                    return state
                if state.needs_settings_redirect:
                    logger.info(
                        "Permission %s, redirecting to Settings",
                        state.value.value,
                        extra={"capability": self.capability.value},
                    )
                    try:
                        await self.settings_opener.open_settings()
                    except Exception:
                        logger.exception(
                            "Failed to open Settings",
                            extra={"capability": self.capability.value},
                        )
                    return state
                waiter = self._enqueue()
                self._in_flight = True
                logger.info(
                    "Requesting OS authorization",
                    extra={"capability": self.capability.value},
                )
                try:
                    await self.platform.request_access()
                except BaseException:
                    self._in_flight = False
                    self._discard(waiter)
                    raise
        return await self._wait(waiter)

    def handle_status_change(self, status: AuthorizationStatus) -> None:
        """Apply an OS status callback and resume pending callers."""
        if status is self._state.value:
            return
        state = self._apply(status)
        logger.info(
            "Authorization changed to %s",
            status.value,
            extra={"capability": self.capability.value},
        )
        self._resume_waiters(state)

    async def handle_foreground(self) -> None:
        """Re-read the OS status on foreground and resume pending callers."""
        state = await self.refresh()
        if self._waiters or self._in_flight:
            logger.info(
                "Resuming %d waiter(s) after foreground with %s",
                len(self._waiters),
                state.value.value,
                extra={"capability": self.capability.value},
            )
        self._resume_waiters(state)

    def close(self) -> None:
        """Detach from the platform and lifecycle notifications."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _apply(self, status: AuthorizationStatus) -> AuthorizationState:
        if not self._state.policy.accepts(status):
            raise UnsupportedStatusError(self.capability, status)
        self._state = AuthorizationState(capability=self.capability, value=status)
        return self._state

    def _enqueue(self) -> asyncio.Future[AuthorizationState]:
        waiter: asyncio.Future[AuthorizationState] = (
            asyncio.get_running_loop().create_future()
        )
        self._waiters.append(waiter)
        return waiter

    def _discard(self, waiter: asyncio.Future[AuthorizationState]) -> None:
        if waiter in self._waiters:
            self._waiters.remove(waiter)

    def _resume_waiters(self, state: AuthorizationState) -> None:
        self._in_flight = False
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(state)

    async def _wait(
        self, waiter: asyncio.Future[AuthorizationState]
    ) -> AuthorizationState:
        try:
            if self.timeout_seconds is None:
                return await waiter
            return await asyncio.wait_for(waiter, self.timeout_seconds)
        except TimeoutError:
            logger.warning(
                "Authorization wait timed out",
                extra={"capability": self.capability.value},
            )
            raise AuthorizationTimeoutError(
                self.capability, self.timeout_seconds or 0.0
            ) from None
        finally:
            self._discard(waiter)
