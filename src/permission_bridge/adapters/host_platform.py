"""Permission platform adapters backed by the native host."""

from collections.abc import Callable
from dataclasses import dataclass, field

from permission_bridge.adapters.host_client import HostClient
from permission_bridge.domain.authorization import AuthorizationStatus, Capability
from permission_bridge.services.authorization import (
    PermissionPlatform,
    SettingsOpener,
    StatusListener,
)


@dataclass
class HostPermissionPlatform(PermissionPlatform):
    """One capability's OS permission API, reached through the host."""

    capability: Capability
    client: HostClient
    _listeners: list[StatusListener] = field(default_factory=list)

    async def current_status(self) -> AuthorizationStatus:
        return await self.client.get_status(self.capability)

    async def request_access(self) -> None:
        await self.client.request_access(self.capability)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener for host-pushed status changes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, status: AuthorizationStatus) -> None:
        """Deliver an OS authorization callback to every listener."""
        for listener in list(self._listeners):
            listener(status)


@dataclass
class HostSettingsOpener(SettingsOpener):
    """Settings deep link dispatched through the host."""

    client: HostClient

    async def open_settings(self) -> None:
        await self.client.open_settings()
