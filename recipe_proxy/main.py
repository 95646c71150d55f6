from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from recipe_proxy.config import Settings, get_settings, require_credential
from recipe_proxy.handlers import recipe_handler, static_handler
from recipe_proxy.services.genai import GenerationProvider, get_provider
from recipe_proxy.utils.body_limit import BodyLimitMiddleware

logger = logging.getLogger(__name__)


async def healthz():
    return {"status": "ok"}


def create_app(settings: Optional[Settings] = None, provider: Optional[GenerationProvider] = None) -> FastAPI:
    """Assemble the ASGI app around one settings object and one provider."""

    settings = settings or get_settings()
    app = FastAPI(title="Recipe Proxy API")
    app.state.settings = settings
    app.state.provider = provider or get_provider(settings)

    app.add_middleware(BodyLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    app.include_router(recipe_handler.router)
    app.include_router(static_handler.router)
    app.add_api_route("/healthz", healthz, methods=["GET"])

    # Must stay last: the mount matches every path.
    app.mount("/", static_handler.PublicFiles(directory=settings.static_dir, check_dir=False), name="static")
    return app


def run_local(settings: Settings) -> None:
    """Bind a port and serve until interrupted. Refuses to start without a key."""

    require_credential(settings)
    app = create_app(settings)
    logger.info("Server running securely at http://localhost:%d", settings.port)
    logger.info("Access the app via: http://localhost:%d/index.html", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
