"""Hosted entry point, e.g. ``uvicorn recipe_proxy.asgi:app``.

Builds the app with hosted settings: no ``.env`` file, no port binding, and a
missing credential only fails individual calls.
"""
from __future__ import annotations

from recipe_proxy.main import create_app

app = create_app()
