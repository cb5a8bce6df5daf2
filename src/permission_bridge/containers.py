"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from permission_bridge.adapters.host_client import HttpxHostClient
from permission_bridge.adapters.host_platform import (
    HostPermissionPlatform,
    HostSettingsOpener,
)
from permission_bridge.config import Settings, parse_timeout
from permission_bridge.domain.authorization import Capability
from permission_bridge.services.actions import ActionDispatcher
from permission_bridge.services.authorization import AuthorizationBridge
from permission_bridge.services.lifecycle import LifecycleEvents
from permission_bridge.services.registry import PermissionRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    platforms: dict[Capability, HostPermissionPlatform]
    lifecycle: LifecycleEvents
    registry: PermissionRegistry
    action_dispatcher: ActionDispatcher
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    host_client = HttpxHostClient.create(
        base_url=resolved_settings.host_base_url,
        token=resolved_settings.host_token,
    )
    settings_opener = HostSettingsOpener(host_client)
    lifecycle = LifecycleEvents()
    timeout = parse_timeout(resolved_settings.authorization_timeout_seconds)
    platforms = {
        capability: HostPermissionPlatform(capability=capability, client=host_client)
        for capability in Capability
    }
    registry = PermissionRegistry(
        bridges={
            capability: AuthorizationBridge(
                capability=capability,
                platform=platform,
                settings_opener=settings_opener,
                lifecycle=lifecycle,
                concurrency=resolved_settings.authorization_concurrency,
                timeout_seconds=timeout,
            )
            for capability, platform in platforms.items()
        },
        lifecycle=lifecycle,
    )
    action_dispatcher = ActionDispatcher(registry)

    async def close_resources() -> None:
        registry.close()
        await host_client.close()

    return AppContainer(
        settings=resolved_settings,
        platforms=platforms,
        lifecycle=lifecycle,
        registry=registry,
        action_dispatcher=action_dispatcher,
        close_resources=close_resources,
    )
