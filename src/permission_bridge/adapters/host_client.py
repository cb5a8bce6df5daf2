"""HTTP client for the native host process."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import BaseModel

from permission_bridge.domain.authorization import (
    AuthorizationStatus,
    Capability,
    parse_status,
)
from permission_bridge.domain.errors import InvalidHostResponseError


class HostStatusPayload(BaseModel):
    """Status body returned by the host."""

    status: str


class HostClient(Protocol):
    """Interface for calls into the native host's permission APIs."""

    async def get_status(self, capability: Capability) -> AuthorizationStatus:
        """Return the OS status the host currently reports."""

    async def request_access(self, capability: Capability) -> None:
        """Ask the host to show the OS permission prompt."""

    async def open_settings(self) -> None:
        """Ask the host to open the system Settings app."""


@dataclass
class HttpxHostClient(HostClient):
    """Host client implemented with httpx."""

    base_url: str
    token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, token: str) -> "HttpxHostClient":
        """Create a host client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            token=token,
            http_client=httpx.AsyncClient(),
        )

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    async def get_status(self, capability: Capability) -> AuthorizationStatus:
        """Fetch the current status for a capability."""
        url = f"{self.base_url}/permissions/{capability.value}"
        response = await self.http_client.get(url, headers=self._headers, timeout=10)
        response.raise_for_status()
        try:
            payload = HostStatusPayload.model_validate_json(response.content)
            return parse_status(payload.status)
        except ValueError as exc:
            raise InvalidHostResponseError(capability, str(exc)) from exc

    async def request_access(self, capability: Capability) -> None:
        """Trigger the OS prompt; the answer comes back through the webhook."""
        url = f"{self.base_url}/permissions/{capability.value}/request"
        response = await self.http_client.post(url, headers=self._headers, timeout=10)
        response.raise_for_status()

    async def open_settings(self) -> None:
        """Open the Settings app on the device."""
        url = f"{self.base_url}/settings/open"
        response = await self.http_client.post(url, headers=self._headers, timeout=10)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
