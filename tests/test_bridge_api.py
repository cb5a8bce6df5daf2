"""Tests for the bridge action endpoint."""

import httpx
from fastapi.testclient import TestClient

from permission_bridge.api.app import create_app
from permission_bridge.containers import AppContainer
from permission_bridge.domain.authorization import AuthorizationStatus, Capability
from permission_bridge.domain.errors import InvalidHostResponseError
from tests.conftest import FakePermissionPlatform, FakeSettingsOpener


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_auth_camera_when_authorized(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    platforms[Capability.CAMERA].status = AuthorizationStatus.AUTHORIZED
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-1", "action": "authCamera"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "id": "call-1",
        "action": "authCamera",
        "result": {"result": "authorized"},
        "error": None,
    }
    assert platforms[Capability.CAMERA].prompts == 0


def test_auth_location_denied_opens_settings(
    container: AppContainer,
    platforms: dict[Capability, FakePermissionPlatform],
    settings_opener: FakeSettingsOpener,
) -> None:
    platforms[Capability.LOCATION].status = AuthorizationStatus.DENIED
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions",
        json={"id": "call-2", "action": "authLocation", "params": {}},
    )

    assert response.json()["result"] == {"result": "denied"}
    assert settings_opener.opened == 1


def test_status_action_uses_cached_state(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-3", "action": "getGalleryAuthStatus"}
    )

    assert response.json()["result"] == {"result": "notDetermined"}


def test_unknown_action_replies_with_error(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/bridge/actions", json={"id": "call-4", "action": "hello"})

    body = response.json()
    assert response.status_code == 200
    assert body["result"] == {}
    assert body["error"] == "Unknown action: hello"


def test_unsupported_platform_status_replies_with_error(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    platforms[Capability.CAMERA].status = AuthorizationStatus.LIMITED
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-5", "action": "authCamera"}
    )

    assert response.json()["error"] == "camera cannot report status limited"


def test_host_failure_replies_with_error(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    platforms[Capability.CAMERA].error = httpx.ConnectError("connection refused")
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-6", "action": "authCamera"}
    )

    assert response.json()["error"].startswith("Permission service unavailable.")


def test_lifespan_reads_initial_states(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    platforms[Capability.PHOTO_LIBRARY].status = AuthorizationStatus.AUTHORIZED

    with TestClient(create_app(container)) as client:
        response = client.post(
            "/bridge/actions",
            json={"id": "call-7", "action": "getGalleryAuthStatus"},
        )

    assert response.json()["result"] == {"result": "authorized"}
    assert platforms[Capability.CAMERA].listeners == []


def test_settings_failure_still_replies_denied(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    async def failing_open_settings() -> None:
        raise httpx.ConnectError("host down")

    platforms[Capability.CAMERA].status = AuthorizationStatus.DENIED
    bridge = container.registry.get(Capability.CAMERA)
    bridge.settings_opener.open_settings = failing_open_settings
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-8", "action": "authCamera"}
    )

    assert response.json()["result"] == {"result": "denied"}
    assert response.json()["error"] is None


def test_invalid_host_status_replies_with_error(
    container: AppContainer, platforms: dict[Capability, FakePermissionPlatform]
) -> None:
    platforms[Capability.LOCATION].error = InvalidHostResponseError(
        Capability.LOCATION, "missing status"
    )
    client = TestClient(create_app(container))

    response = client.post(
        "/bridge/actions", json={"id": "call-9", "action": "authLocation"}
    )

    assert response.status_code == 200
    assert response.json()["error"] == (
        "invalid location status from host: missing status"
    )
