"""Domain models for capability authorization."""

from dataclasses import dataclass
from enum import Enum


class Capability(str, Enum):
    """Sensitive device capabilities guarded by an OS permission."""

    CAMERA = "camera"
    LOCATION = "location"
    PHOTO_LIBRARY = "photo_library"


class AuthorizationStatus(str, Enum):
    """Union of the OS-reported permission decisions."""

    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED = "authorized"
    LIMITED = "limited"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"


_WIRE_NAMES: dict[AuthorizationStatus, str] = {
    AuthorizationStatus.NOT_DETERMINED: "notDetermined",
    AuthorizationStatus.DENIED: "denied",
    AuthorizationStatus.RESTRICTED: "restricted",
    AuthorizationStatus.AUTHORIZED: "authorized",
    AuthorizationStatus.LIMITED: "limited",
    AuthorizationStatus.AUTHORIZED_ALWAYS: "authorizedAlways",
    AuthorizationStatus.AUTHORIZED_WHEN_IN_USE: "authorizedWhenInUse",
}
_FROM_WIRE = {wire: status for status, wire in _WIRE_NAMES.items()}

_SETTINGS_REDIRECT = frozenset(
    {AuthorizationStatus.DENIED, AuthorizationStatus.RESTRICTED}
)


@dataclass(frozen=True)
class CapabilityPolicy:
    """Which statuses a capability can report and which ones grant access."""

    allowed: frozenset[AuthorizationStatus]
    sufficient: frozenset[AuthorizationStatus]

    def is_sufficient(self, status: AuthorizationStatus) -> bool:
        return status in self.sufficient

    def accepts(self, status: AuthorizationStatus) -> bool:
        return status in self.allowed


_BASE = frozenset(
    {
        AuthorizationStatus.NOT_DETERMINED,
        AuthorizationStatus.DENIED,
        AuthorizationStatus.RESTRICTED,
    }
)

POLICIES: dict[Capability, CapabilityPolicy] = {
    Capability.CAMERA: CapabilityPolicy(
        allowed=_BASE | {AuthorizationStatus.AUTHORIZED},
        sufficient=frozenset({AuthorizationStatus.AUTHORIZED}),
    ),
    Capability.LOCATION: CapabilityPolicy(
        allowed=_BASE
        | {
            AuthorizationStatus.AUTHORIZED_ALWAYS,
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        },
        sufficient=frozenset(
            {
                AuthorizationStatus.AUTHORIZED_ALWAYS,
                AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
            }
        ),
    ),
    Capability.PHOTO_LIBRARY: CapabilityPolicy(
        allowed=_BASE | {AuthorizationStatus.AUTHORIZED, AuthorizationStatus.LIMITED},
        sufficient=frozenset(
            {AuthorizationStatus.AUTHORIZED, AuthorizationStatus.LIMITED}
        ),
    ),
}


@dataclass(frozen=True)
class AuthorizationState:
    """The last known OS decision for one capability."""

    capability: Capability
    value: AuthorizationStatus

    @property
    def policy(self) -> CapabilityPolicy:
        return POLICIES[self.capability]

    @property
    def is_sufficient(self) -> bool:
        """Return True when the capability may be used right away."""
        return self.policy.is_sufficient(self.value)

    @property
    def needs_settings_redirect(self) -> bool:
        """Return True when only the Settings app can change the decision."""
        return self.value in _SETTINGS_REDIRECT

    def wire_name(self) -> str:
        """Return the status name reported to the script bridge."""
        return to_wire_name(self.capability, self.value)


def to_wire_name(capability: Capability, status: AuthorizationStatus) -> str:
    """Format a status for the script bridge, or ``unknown`` if unsupported."""
    if not POLICIES[capability].accepts(status):
        return "unknown"
    return _WIRE_NAMES[status]


def parse_status(raw: str) -> AuthorizationStatus:
    """Parse a wire name or enum value into an AuthorizationStatus."""
    cleaned = raw.strip()
    if cleaned in _FROM_WIRE:
        return _FROM_WIRE[cleaned]
    return AuthorizationStatus(cleaned)
