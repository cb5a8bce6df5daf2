"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from permission_bridge.config import Settings
from permission_bridge.containers import AppContainer
from permission_bridge.domain.authorization import AuthorizationStatus, Capability
from permission_bridge.services.actions import ActionDispatcher
from permission_bridge.services.authorization import (
    AuthorizationBridge,
    PermissionPlatform,
    SettingsOpener,
    StatusListener,
)
from permission_bridge.services.lifecycle import LifecycleEvents
from permission_bridge.services.registry import PermissionRegistry


@dataclass
class FakePermissionPlatform(PermissionPlatform):
    """Fake OS permission API with a scriptable status."""

    status: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED
    answer: AuthorizationStatus | None = None
    prompts: int = 0
    reads: int = 0
    error: Exception | None = None
    listeners: list[StatusListener] = field(default_factory=list)

    async def current_status(self) -> AuthorizationStatus:
        self.reads += 1
        if self.error is not None:
            raise self.error
        return self.status

    async def request_access(self) -> None:
        self.prompts += 1
        if self.answer is not None:
            self.respond(self.answer)

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def respond(self, status: AuthorizationStatus) -> None:
        """Simulate the OS answering the prompt."""
        self.status = status
        self.publish(status)

    def publish(self, status: AuthorizationStatus) -> None:
        for listener in list(self.listeners):
            listener(status)


@dataclass
class FakeSettingsOpener(SettingsOpener):
    """Fake Settings deep link that counts calls."""

    opened: int = 0

    async def open_settings(self) -> None:
        self.opened += 1


def make_bridge(
    capability: Capability = Capability.CAMERA,
    status: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED,
    **kwargs: object,
) -> tuple[AuthorizationBridge, FakePermissionPlatform, FakeSettingsOpener]:
    platform = FakePermissionPlatform(status=status)
    opener = FakeSettingsOpener()
    bridge = AuthorizationBridge(
        capability=capability,
        platform=platform,
        settings_opener=opener,
        **kwargs,
    )
    return bridge, platform, opener


@pytest.fixture
def settings() -> Settings:
    return Settings(
        host_base_url="https://host.test",
        host_token="host-token",
        webhook_token="webhook-token",
    )


@pytest.fixture
def settings_opener() -> FakeSettingsOpener:
    return FakeSettingsOpener()


@pytest.fixture
def platforms() -> dict[Capability, FakePermissionPlatform]:
    return {capability: FakePermissionPlatform() for capability in Capability}


@pytest.fixture
def container(
    settings: Settings,
    platforms: dict[Capability, FakePermissionPlatform],
    settings_opener: FakeSettingsOpener,
) -> AppContainer:
    lifecycle = LifecycleEvents()
    registry = PermissionRegistry(
        bridges={
            capability: AuthorizationBridge(
                capability=capability,
                platform=platform,
                settings_opener=settings_opener,
                lifecycle=lifecycle,
            )
            for capability, platform in platforms.items()
        },
        lifecycle=lifecycle,
    )

    async def close_resources() -> None:
        registry.close()

    return AppContainer(
        settings=settings,
        platforms=platforms,
        lifecycle=lifecycle,
        registry=registry,
        action_dispatcher=ActionDispatcher(registry),
        close_resources=close_resources,
    )
