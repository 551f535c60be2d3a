"""Application factory for the PeerTutor server."""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI

from .config import configure_logging
from .db import get_conn
from .error_handlers import register_error_handlers
from .routers import register_routers
from .startup import register_startup_events

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="PeerTutor")
    register_error_handlers(app)
    register_routers(app)
    templates_dir = Path(__file__).parent.parent.parent / "templates"
    register_startup_events(app, get_conn, templates_dir)
    return app


app = create_app()
