"""ASGI entrypoint: ``uvicorn fuel_hub.api.asgi:app``."""

from fuel_hub.api.app import create_app
from fuel_hub.containers import build_container

app = create_app(build_container())
