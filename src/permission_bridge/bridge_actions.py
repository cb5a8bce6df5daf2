"""Script-bridge action definitions."""

from dataclasses import dataclass
from enum import Enum

from permission_bridge.domain.authorization import Capability


@dataclass(frozen=True)
class ActionDefinition:
    """Declarative mapping from a bridge action to a capability operation."""

    name: str
    capability: Capability
    prompts: bool


class BridgeAction(Enum):
    """Enum of supported bridge actions (single source of truth)."""

    AUTH_CAMERA = ActionDefinition("authCamera", Capability.CAMERA, True)
    CAMERA_STATUS = ActionDefinition("getCameraAuthStatus", Capability.CAMERA, False)
    AUTH_LOCATION = ActionDefinition("authLocation", Capability.LOCATION, True)
    LOCATION_STATUS = ActionDefinition(
        "getLocationAuthStatus", Capability.LOCATION, False
    )
    AUTH_GALLERY = ActionDefinition("authGallery", Capability.PHOTO_LIBRARY, True)
    GALLERY_STATUS = ActionDefinition(
        "getGalleryAuthStatus", Capability.PHOTO_LIBRARY, False
    )


def find_action(name: str) -> ActionDefinition | None:
    """Return the action definition for a bridge action name."""
    for entry in BridgeAction:
        if entry.value.name == name:
            return entry.value
    return None
