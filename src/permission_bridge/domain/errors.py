"""Errors raised by authorization bridges.

A denied or restricted permission is a regular result, not an error.
"""

from permission_bridge.domain.authorization import AuthorizationStatus, Capability


class AuthorizationError(Exception):
    """Base class for authorization bridge failures."""

    def __init__(self, capability: Capability, message: str) -> None:
        super().__init__(message)
        self.capability = capability


class AuthorizationPendingError(AuthorizationError):
    """A permission prompt for the capability is already in flight."""

    def __init__(self, capability: Capability) -> None:
        super().__init__(
            capability, f"{capability.value} authorization request already pending"
        )


class AuthorizationTimeoutError(AuthorizationError):
    """The platform did not answer within the configured timeout."""

    def __init__(self, capability: Capability, timeout: float) -> None:
        super().__init__(
            capability,
            f"{capability.value} authorization timed out after {timeout:g}s",
        )
        self.timeout = timeout


class UnsupportedStatusError(AuthorizationError):
    """A platform reported a status the capability cannot have."""

    def __init__(self, capability: Capability, status: AuthorizationStatus) -> None:
        super().__init__(
            capability, f"{capability.value} cannot report status {status.value}"
        )
        self.status = status


class InvalidHostResponseError(AuthorizationError):
    """The host answered a status read with an unusable payload."""

    def __init__(self, capability: Capability, detail: str) -> None:
        super().__init__(
            capability, f"invalid {capability.value} status from host: {detail}"
        )
