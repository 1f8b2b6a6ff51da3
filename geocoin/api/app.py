"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_session
from geocoin.api.routes import api_router
from geocoin.api.session import GameSession
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, session: GameSession | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    The game is loaded when the server starts and saved when it shuts down.
    """
    if config is None:
        config = session.config if session is not None else GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        active = session if session is not None else GameSession(_config)
        set_session(active)
        active.start()
        logger.info("API server started - game loaded.")
        yield
        active.stop()
        set_session(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin",
        description=(
            "Location-based coin collection game API.\n\n"
            "## API Groups\n\n"
            "- **State** - Player, nearby caches, movement trail, activity feed\n"
            "- **Caches** - Inspect caches, collect and deposit coins\n"
            "- **Movement** - Step the player or send a geolocation fix\n"
            "- **Control** - Save and reset the world\n"
            "- **Config** - Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS - allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
