"""ASGI entrypoint for the NutriFlow API."""

from nutriflow.api.app import create_app
from nutriflow.containers import build_container

app = create_app(build_container())
