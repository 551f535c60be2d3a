"""Postgres connection settings for the document store."""
from __future__ import annotations

import os

import psycopg2


def build_db_dsn() -> str:
    dsn = os.getenv("DATABASE_URL")
    if dsn:
        return dsn
    user = os.getenv("POSTGRES_USER", "peertutor")
    password = os.getenv("POSTGRES_PASSWORD", "secret")
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    db = os.getenv("POSTGRES_DB", "peertutor")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


def get_connect_timeout() -> int:
    try:
        return max(1, int(os.getenv("POSTGRES_CONNECT_TIMEOUT", "5")))
    except ValueError:
        return 5


def get_conn():
    """Open a connection for one store session; callers own commit and close."""
    return psycopg2.connect(build_db_dsn(), connect_timeout=get_connect_timeout())
