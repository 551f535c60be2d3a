"""Register FastAPI routers."""
from __future__ import annotations

from fastapi import FastAPI

from . import connections, doubts, matching, users


def register_routers(app: FastAPI) -> None:
    app.include_router(users.create_router())
    app.include_router(doubts.create_router())
    app.include_router(connections.create_router())
    app.include_router(matching.router)
