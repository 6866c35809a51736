"""ASGI entrypoint for the Inner Garden API."""

from inner_garden.api.app import create_app
from inner_garden.containers import build_container

app = create_app(build_container())
