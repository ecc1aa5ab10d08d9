"""ASGI entrypoint for the sneaker inventory API."""

from sneaker_inventory.api.app import create_app
from sneaker_inventory.containers import build_container

app = create_app(build_container())
