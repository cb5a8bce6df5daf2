"""Pydantic models for bridge and host webhook payloads."""

from typing import Any

from pydantic import BaseModel, Field


class BridgeRequest(BaseModel):
    """Action call posted by the embedded web content."""

    id: str
    action: str
    params: dict[str, Any] = Field(default_factory=dict)


class BridgeReply(BaseModel):
    """Reply delivered back to the embedded web content."""

    id: str
    action: str
    result: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None


class HostStatusUpdate(BaseModel):
    """OS authorization callback forwarded by the host."""

    status: str


class CapabilityState(BaseModel):
    """Cached authorization state for one capability."""

    capability: str
    status: str
    sufficient: bool
