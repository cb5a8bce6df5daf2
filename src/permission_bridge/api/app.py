"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from permission_bridge.api.bridge_models import BridgeReply, BridgeRequest
from permission_bridge.api.host import router as host_router
from permission_bridge.app_logging import configure_logging
from permission_bridge.containers import AppContainer
from permission_bridge.domain.errors import AuthorizationError
from permission_bridge.services.actions import UnknownActionError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.registry.refresh_all()
        except Exception:
            logger.exception("Failed to read initial authorization states")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(host_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/bridge/actions")
    async def bridge_action(call: BridgeRequest, request: Request) -> BridgeReply:
        """Run a bridge action and reply with its result or error."""
        state_container: AppContainer = request.app.state.container
        try:
            result = await state_container.action_dispatcher.dispatch(
                call.action, call.params
            )
        except UnknownActionError as exc:
            logger.warning("Unknown bridge action", extra={"action": call.action})
            return BridgeReply(id=call.id, action=call.action, error=str(exc))
        except AuthorizationError as exc:
            return BridgeReply(id=call.id, action=call.action, error=str(exc))
        except httpx.HTTPError as exc:
            logger.exception(
                "Host call failed during bridge action",
                extra={"action": call.action},
            )
            return BridgeReply(
                id=call.id,
                action=call.action,
                error=_format_host_error(
                    state_container, exc, "Permission service unavailable."
                ),
            )
        return BridgeReply(id=call.id, action=call.action, result=result)

    return app


def _format_host_error(
    state_container: AppContainer, exc: Exception, fallback: str
) -> str:
    """Return a caller-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
