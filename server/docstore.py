"""Document store on top of a single Postgres JSONB table.

Collections (``users``, ``doubts``, ``connections``, ``connectionRequests``)
share one table keyed by ``(collection, id)``. Every method runs on the
connection the store was created with, so all calls made while handling
one request belong to the same transaction.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

import psycopg2.extras
from psycopg2.extensions import connection
from psycopg2.extras import Json

ConnectionFactory = Callable[[], connection]

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

USERS = "users"
DOUBTS = "doubts"
CONNECTIONS = "connections"
CONNECTION_REQUESTS = "connectionRequests"

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS documents (
      collection  TEXT NOT NULL,
      id          TEXT NOT NULL,
      data        JSONB NOT NULL DEFAULT '{}'::jsonb,
      created_at  TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp(),
      PRIMARY KEY (collection, id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_documents_created ON documents(collection, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_documents_data ON documents USING GIN (data jsonb_path_ops)",
]


def _to_document(row: Mapping[str, Any]) -> Document:
    doc = dict(row.get("data") or {})
    doc["id"] = row["id"]
    return doc


def _strip_id(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k != "id"}


class DocumentStore:
    """Key-value-of-documents access with query-by-field and ordering."""

    def __init__(self, conn: connection) -> None:
        self._conn = conn

    def _cursor(self):
        return self._conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._cursor() as cur:
            cur.execute(
                "SELECT id, data FROM documents WHERE collection = %s AND id = %s",
                (collection, doc_id),
            )
            row = cur.fetchone()
        return _to_document(row) if row else None

    def query(
        self,
        collection: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Document]:
        """Return documents whose top-level ``field`` equals ``value``.

        Without ``field`` the whole collection is returned. Results follow
        insertion order unless ``order_by`` names a field to sort on.
        """
        sql = "SELECT id, data FROM documents WHERE collection = %s"
        params: List[Any] = [collection]
        if field is not None:
            sql += " AND data -> %s = %s::jsonb"
            params.extend([field, Json(value)])
        if order_by:
            direction = "DESC" if descending else "ASC"
            sql += f" ORDER BY data ->> %s {direction}, created_at, id"
            params.append(order_by)
        else:
            sql += " ORDER BY created_at, id"
        with self._cursor() as cur:
            cur.execute(sql, params)
            return [_to_document(row) for row in cur.fetchall()]

    def insert(
        self,
        collection: str,
        data: Mapping[str, Any],
        *,
        doc_id: Optional[str] = None,
    ) -> Optional[str]:
        """Create a document and return its id.

        With an explicit ``doc_id`` the insert only happens when that id is
        free; ``None`` is returned when the document already exists.
        """
        new_id = doc_id or uuid.uuid4().hex
        with self._cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents(collection, id, data)
                VALUES (%s, %s, %s)
                ON CONFLICT (collection, id) DO NOTHING
                RETURNING id
                """,
                (collection, new_id, Json(_strip_id(data))),
            )
            row = cur.fetchone()
        return row["id"] if row else None

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> bool:
        """Overwrite the given top-level fields, leaving the rest untouched."""
        with self._cursor() as cur:
            cur.execute(
                """
                UPDATE documents SET data = data || %s::jsonb
                WHERE collection = %s AND id = %s
                """,
                (Json(_strip_id(fields)), collection, doc_id),
            )
            return cur.rowcount > 0

    def delete(self, collection: str, doc_id: str) -> Optional[Document]:
        """Remove a document and return it, or ``None`` if it was already gone."""
        with self._cursor() as cur:
            cur.execute(
                "DELETE FROM documents WHERE collection = %s AND id = %s RETURNING id, data",
                (collection, doc_id),
            )
            row = cur.fetchone()
        return _to_document(row) if row else None

    def add_to_set(self, collection: str, doc_id: str, field: str, value: Any) -> Optional[bool]:
        """Append ``value`` to the array ``field`` unless it is already there.

        Returns ``True`` when the value was added, ``False`` when it was
        present and ``None`` when the document does not exist. The check and
        the write happen in one statement, so concurrent callers cannot
        produce duplicates. A missing or non-array field counts as empty.
        """
        current = (
            "CASE WHEN jsonb_typeof(data -> %(field)s) = 'array' "
            "THEN data -> %(field)s ELSE '[]'::jsonb END"
        )
        with self._cursor() as cur:
            cur.execute(
                f"""
                UPDATE documents
                SET data = jsonb_set(
                    data,
                    ARRAY[%(field)s],
                    {current} || jsonb_build_array(%(value)s::jsonb)
                )
                WHERE collection = %(collection)s AND id = %(id)s
                  AND NOT ({current} @> jsonb_build_array(%(value)s::jsonb))
                RETURNING id
                """,
                {"field": field, "value": Json(value), "collection": collection, "id": doc_id},
            )
            if cur.fetchone():
                return True
        return False if self.get(collection, doc_id) is not None else None


@contextmanager
def open_store(conn_factory: ConnectionFactory) -> Iterator[DocumentStore]:
    """Yield a store bound to a fresh connection, committing on success."""
    conn = conn_factory()
    try:
        with conn:
            yield DocumentStore(conn)
    finally:
        conn.close()


def ensure_schema(conn_factory: ConnectionFactory) -> None:
    conn = conn_factory()
    try:
        with conn, conn.cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                cur.execute(statement)
    finally:
        conn.close()
    logger.info("Document store schema is ready")


__all__ = [
    "ConnectionFactory",
    "Document",
    "DocumentStore",
    "open_store",
    "ensure_schema",
    "SCHEMA_STATEMENTS",
    "USERS",
    "DOUBTS",
    "CONNECTIONS",
    "CONNECTION_REQUESTS",
]
