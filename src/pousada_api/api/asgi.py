"""ASGI entrypoint for the pousada booking API."""

from pousada_api.api.app import create_app
from pousada_api.containers import build_container

app = create_app(build_container())
