"""ASGI entrypoint for the health journal API."""

from health_journal.api.app import create_app
from health_journal.containers import build_container

app = create_app(build_container())
