"""ASGI entrypoint for the supplement finder API."""

from supplement_finder.api.app import create_app
from supplement_finder.containers import build_container

app = create_app(build_container())
