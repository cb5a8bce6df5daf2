"""Per-process registry of authorization bridges."""

from dataclasses import dataclass

from permission_bridge.domain.authorization import AuthorizationState, Capability
from permission_bridge.services.authorization import AuthorizationBridge
from permission_bridge.services.lifecycle import LifecycleEvents


@dataclass
class PermissionRegistry:
    """Owns exactly one bridge per capability."""

    bridges: dict[Capability, AuthorizationBridge]
    lifecycle: LifecycleEvents

    def __post_init__(self) -> None:
        for capability, bridge in self.bridges.items():
            if bridge.capability is not capability:
                raise ValueError(
                    f"bridge for {bridge.capability.value} registered "
                    f"under {capability.value}"
                )

    def get(self, capability: Capability) -> AuthorizationBridge:
        """Return the bridge for a capability."""
        return self.bridges[capability]

    def status(self, capability: Capability) -> AuthorizationState:
        return self.get(capability).state

    def states(self) -> list[AuthorizationState]:
        """Return the cached state of every registered capability."""
        return [bridge.state for bridge in self.bridges.values()]

    async def refresh_all(self) -> list[AuthorizationState]:
        """Read the current platform status for every capability."""
        return [await bridge.refresh() for bridge in self.bridges.values()]

    async def notify_foreground(self) -> None:
        await self.lifecycle.notify_foreground()

    def close(self) -> None:
        for bridge in self.bridges.values():
            bridge.close()
