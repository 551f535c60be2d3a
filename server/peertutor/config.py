"""Application configuration helpers."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Chatty client libraries used by the matcher backends.
QUIET_LOGGERS = ("urllib3", "httpx", "openai")


def configure_logging(default_level: int = logging.INFO) -> int:
    """Configure root logging from ``LOG_LEVEL`` and return the level in use.

    Safe to call more than once: the stream handler is only attached when
    the root logger has none.
    """

    load_dotenv()
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = default_level

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level


def get_auth_user_header() -> str:
    """Header set by the authentication gateway with the signed-in user id."""

    value = os.getenv("AUTH_USER_HEADER")
    if value and value.strip():
        return value.strip()
    return "X-User-Id"
