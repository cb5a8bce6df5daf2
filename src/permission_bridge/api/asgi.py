"""ASGI entrypoint for the permission bridge API."""

from permission_bridge.api.app import create_app
from permission_bridge.containers import build_container

app = create_app(build_container())
