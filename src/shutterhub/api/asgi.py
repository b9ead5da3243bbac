"""ASGI entrypoint for the ShutterHub API."""

from shutterhub.api.app import create_app
from shutterhub.containers import build_container

app = create_app(build_container())
