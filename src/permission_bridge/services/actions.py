"""Dispatch script-bridge actions onto authorization bridges."""

import logging
from dataclasses import dataclass

from permission_bridge.bridge_actions import find_action
from permission_bridge.services.registry import PermissionRegistry

logger = logging.getLogger(__name__)


class UnknownActionError(Exception):
    """The bridge action name is not supported."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown action: {action}")
        self.action = action


@dataclass
class ActionDispatcher:
    """Runs permission actions requested by the embedded web content."""

    registry: PermissionRegistry

    async def dispatch(
        self, action: str, params: dict[str, object] | None = None
    ) -> dict[str, object]:
        """Perform an action and return its result payload."""
        definition = find_action(action)
        if definition is None:
            raise UnknownActionError(action)
        logger.info("Bridge call", extra={"action": action})
        bridge = self.registry.get(definition.capability)
        if definition.prompts:
            state = await bridge.authorize()
        else:
            state = bridge.state
        return {"result": state.wire_name()}
