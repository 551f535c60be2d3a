"""Startup hooks: schema creation and optional demo seed."""
from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from docstore import USERS, ConnectionFactory, ensure_schema, open_store
from utils import normalize_optional_str, parse_subjects

logger = logging.getLogger(__name__)

SEED_FILE = "test_users.csv"


def seed_enabled() -> bool:
    return (os.getenv("TEST_IMPORT") or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def load_seed_users(path: Path) -> List[Dict[str, Any]]:
    """Parse demo user rows into ``users`` documents; rows without uid or name are skipped."""
    if not path.exists():
        logger.warning("Seed file %s not found", path)
        return []
    users: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            uid = normalize_optional_str(row.get("uid"))
            name = normalize_optional_str(row.get("name"))
            if not (uid and name):
                continue
            users.append(
                {
                    "uid": uid,
                    "name": name,
                    "email": normalize_optional_str(row.get("email")),
                    "role": normalize_optional_str(row.get("role")) or "Student",
                    "subjects": parse_subjects(row.get("subjects")),
                    "bio": normalize_optional_str(row.get("bio")) or "",
                }
            )
    return users


def maybe_seed_test_data(conn_factory: ConnectionFactory, templates_dir: Path) -> int:
    """Insert demo users when ``TEST_IMPORT`` is set.

    Existing users are left alone. Returns the number of users created.
    """
    if not seed_enabled():
        return 0

    users = load_seed_users(templates_dir / SEED_FILE)
    if not users:
        return 0

    created = 0
    try:
        with open_store(conn_factory) as store:
            for data in users:
                if store.insert(USERS, data, doc_id=data["uid"]):
                    created += 1
    except Exception as exc:  # pragma: no cover - best effort seed
        logger.warning("TEST_IMPORT failed: %s", exc)
        return 0
    logger.info("TEST_IMPORT created %d users", created)
    return created


def register_startup_events(app, conn_factory: ConnectionFactory, templates_dir: Path) -> None:
    @app.on_event("startup")
    async def _startup_event() -> None:  # pragma: no cover - integration behaviour
        ensure_schema(conn_factory)
        maybe_seed_test_data(conn_factory, templates_dir)
