"""Host webhook endpoints with simple token auth."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from permission_bridge.api.bridge_models import CapabilityState, HostStatusUpdate
from permission_bridge.domain.authorization import Capability, parse_status
from permission_bridge.domain.errors import UnsupportedStatusError
from permission_bridge.services.lifecycle import ForegroundRefreshError

if TYPE_CHECKING:
    from permission_bridge.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/host", tags=["host"])


def _get_webhook_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.webhook_token


async def require_host(
    x_host_token: str | None = Header(default=None),
    webhook_token: str = Depends(_get_webhook_token),
) -> None:
    """Ensure requests include a valid host token."""
    if not x_host_token or x_host_token != webhook_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post(
    "/permissions/{capability}/status", dependencies=[Depends(require_host)]
)
async def permission_status_changed(
    capability: Capability, update: HostStatusUpdate, request: Request
) -> CapabilityState:
    """Apply an OS authorization callback for a capability."""
    container: AppContainer = request.app.state.container
    try:
        value = parse_status(update.status)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    try:
        container.platforms[capability].publish(value)
    except UnsupportedStatusError as exc:
        logger.warning(
            "Host reported unsupported status",
            extra={"capability": capability.value, "status": value.value},
        )
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _to_capability_state(container, capability)


@router.post("/lifecycle/foreground", dependencies=[Depends(require_host)])
async def app_foreground(request: Request) -> dict[str, str]:
    """Refresh every capability after the app returns to the foreground."""
    container: AppContainer = request.app.state.container
    try:
        await container.registry.notify_foreground()
    except ForegroundRefreshError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    return {"status": "ok"}


@router.get("/permissions", dependencies=[Depends(require_host)])
async def list_permissions(request: Request) -> dict[str, list[CapabilityState]]:
    """Return the cached state of every capability."""
    container: AppContainer = request.app.state.container
    return {
        "permissions": [
            _to_capability_state(container, state.capability)
            for state in container.registry.states()
        ]
    }


def _to_capability_state(
    container: AppContainer, capability: Capability
) -> CapabilityState:
    state = container.registry.status(capability)
    return CapabilityState(
        capability=capability.value,
        status=state.wire_name(),
        sufficient=state.is_sufficient,
    )
