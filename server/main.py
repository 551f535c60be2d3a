"""Entry point: ``uvicorn main:app`` from the ``server`` directory."""
from __future__ import annotations

import os

from peertutor import app

__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover - manual launch
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
