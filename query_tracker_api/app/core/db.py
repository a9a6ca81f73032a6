"""
SQLite query store and simple migration system.

``QueryStore`` is the only component that talks to the database.  It
is constructed explicitly, opened with :meth:`QueryStore.connect`
(which applies pending migrations) and released with
:meth:`QueryStore.close`.  Every operation opens its own short‑lived
connection, so concurrent request handlers never share one.

The one‑query‑per‑record rule is enforced by a ``UNIQUE`` constraint
on ``queries.form_data_id``.  A rejected insert is reported as
:class:`DuplicateQueryError`; updates and deletes of unknown ids are
reported as :class:`RecordNotFoundError`.  Any other SQLite failure is
wrapped in :class:`StoreError`.
"""

import logging
import os
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from .config import Settings
from .exceptions import (
    DuplicateQueryError,
    RecordNotFoundError,
    StoreClosedError,
    StoreError,
)
from ..schemas.form_data import FormDataRead
from ..schemas.query import QueryRead, QueryStatus

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS form_data (
            id TEXT PRIMARY KEY,
            question TEXT NOT NULL,
            answer TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS queries (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL DEFAULT 'OPEN' CHECK (status IN ('OPEN', 'RESOLVED')),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            form_data_id TEXT NOT NULL UNIQUE,
            FOREIGN KEY(form_data_id) REFERENCES form_data(id) ON DELETE CASCADE
        );
        """,
    ),
]

_QUERY_COLUMNS = "id, title, description, status, created_at, updated_at, form_data_id"


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used directly; relative paths are resolved
    against the project root.
    """
    if database_url == MEMORY_DATABASE or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _next_timestamp(previous: str) -> str:
    """Return the current time, strictly later than ``previous``."""
    now = _now()
    last = datetime.fromisoformat(previous)
    if now <= last:
        now = last + timedelta(microseconds=1)
    return now.isoformat()


class QueryStore:
    """SQLite persistence for FormData and queries."""

    def __init__(self, database_url: str, *, timeout: float = 5.0) -> None:
        self.database_url = database_url
        self.timeout = timeout
        self._connected = False
        # Holds a shared in‑memory database open between connect and close.
        self._keeper: Optional[sqlite3.Connection] = None
        if database_url == MEMORY_DATABASE:
            self._target = f"file:query_tracker_{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._uri = True
        else:
            self._target = resolve_database_path(database_url)
            self._uri = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueryStore":
        return cls(settings.database_url)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """Open the store and apply pending migrations.

        Calling ``connect`` on an open store is a no‑op.
        """
        if self._connected:
            return
        if self._uri:
            self._keeper = self._open()
        self._connected = True
        try:
            self._migrate()
        except sqlite3.Error as exc:
            self.close()
            raise StoreError(f"Failed to initialise database: {exc}") from exc
        logger.info("Query store connected (%s)", self.database_url)

    def close(self) -> None:
        if not self._connected:
            return
        self._connected = False
        if self._keeper is not None:
            self._keeper.close()
            self._keeper = None
        logger.info("Query store closed (%s)", self.database_url)

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._target, timeout=self.timeout, uri=self._uri)
        conn.row_factory = sqlite3.Row
        # Foreign keys are off by default in SQLite and must be enabled per
        # connection for the ON DELETE CASCADE clause to apply.
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor on a fresh connection, committing on success."""
        if not self._connected:
            raise StoreClosedError("Query store is not connected")
        conn = self._open()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def _migrate(self) -> None:
        with self._cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
                    logger.debug("Applied migration %s", version)

    # ------------------------------------------------------------------
    # FormData
    # ------------------------------------------------------------------
    def find_form_data_by_id(self, form_data_id: str) -> Optional[FormDataRead]:
        try:
            with self._cursor() as cursor:
                row = cursor.execute(
                    "SELECT id, question, answer FROM form_data WHERE id = ?",
                    (form_data_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        if not row:
            return None
        return FormDataRead(id=row["id"], question=row["question"], answer=row["answer"])

    def list_form_data(self) -> List[FormDataRead]:
        """Return every FormData row joined with its query, if any."""
        try:
            with self._cursor() as cursor:
                rows = cursor.execute(
                    """
                    SELECT f.id, f.question, f.answer,
                           q.id AS q_id, q.title AS q_title, q.description AS q_description,
                           q.status AS q_status, q.created_at AS q_created_at,
                           q.updated_at AS q_updated_at
                    FROM form_data f
                    LEFT JOIN queries q ON q.form_data_id = f.id
                    ORDER BY f.rowid ASC
                    """
                ).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        result = []
        for row in rows:
            query = None
            if row["q_id"] is not None:
                query = QueryRead(
                    id=row["q_id"],
                    title=row["q_title"],
                    description=row["q_description"],
                    status=row["q_status"],
                    created_at=row["q_created_at"],
                    updated_at=row["q_updated_at"],
                    form_data_id=row["id"],
                )
            result.append(
                FormDataRead(id=row["id"], question=row["question"], answer=row["answer"], query=query)
            )
        return result

    def insert_form_data(self, question: str, answer: str, form_data_id: Optional[str] = None) -> FormDataRead:
        form_data_id = form_data_id or str(uuid.uuid4())
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    "INSERT INTO form_data (id, question, answer) VALUES (?, ?, ?)",
                    (form_data_id, question, answer),
                )
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return FormDataRead(id=form_data_id, question=question, answer=answer)

    def count_form_data(self) -> int:
        try:
            with self._cursor() as cursor:
                row = cursor.execute("SELECT COUNT(*) AS total FROM form_data").fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return row["total"]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_query_by_id(self, query_id: str) -> Optional[QueryRead]:
        try:
            with self._cursor() as cursor:
                row = cursor.execute(
                    f"SELECT {_QUERY_COLUMNS} FROM queries WHERE id = ?",
                    (query_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_query_read(row) if row else None

    def find_query_by_form_data_id(self, form_data_id: str) -> Optional[QueryRead]:
        try:
            with self._cursor() as cursor:
                row = cursor.execute(
                    f"SELECT {_QUERY_COLUMNS} FROM queries WHERE form_data_id = ?",
                    (form_data_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_query_read(row) if row else None

    def create_query(self, form_data_id: str, title: str, description: str = "") -> QueryRead:
        """Insert a new ``OPEN`` query.

        Raises :class:`DuplicateQueryError` when a query already exists
        for ``form_data_id`` and :class:`RecordNotFoundError` when the
        FormData row does not exist.
        """
        query_id = str(uuid.uuid4())
        timestamp = _now().isoformat()
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    """
                    INSERT INTO queries (id, title, description, status, created_at, updated_at, form_data_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (query_id, title, description, QueryStatus.OPEN.value, timestamp, timestamp, form_data_id),
                )
                row = cursor.execute(
                    f"SELECT {_QUERY_COLUMNS} FROM queries WHERE id = ?",
                    (query_id,),
                ).fetchone()
        except sqlite3.IntegrityError as exc:
            message = str(exc)
            if "UNIQUE" in message and "form_data_id" in message:
                raise DuplicateQueryError(form_data_id) from exc
            if "FOREIGN KEY" in message:
                raise RecordNotFoundError("form_data", form_data_id) from exc
            raise StoreError(message) from exc
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_query_read(row)

    def update_query_by_id(
        self,
        query_id: str,
        *,
        status: Optional[QueryStatus] = None,
        description: Optional[str] = None,
    ) -> QueryRead:
        """Overwrite the supplied fields and advance ``updated_at``.

        Raises :class:`RecordNotFoundError` if ``query_id`` is unknown.
        """
        changes = {}
        if status is not None:
            changes["status"] = QueryStatus(status).value
        if description is not None:
            changes["description"] = description
        try:
            with self._cursor() as cursor:
                current = cursor.execute(
                    "SELECT updated_at FROM queries WHERE id = ?",
                    (query_id,),
                ).fetchone()
                if not current:
                    raise RecordNotFoundError("queries", query_id)
                changes["updated_at"] = _next_timestamp(current["updated_at"])
                assignments = ", ".join(f"{column} = ?" for column in changes)
                cursor.execute(
                    f"UPDATE queries SET {assignments} WHERE id = ?",
                    (*changes.values(), query_id),
                )
                if cursor.rowcount == 0:
                    raise RecordNotFoundError("queries", query_id)
                row = cursor.execute(
                    f"SELECT {_QUERY_COLUMNS} FROM queries WHERE id = ?",
                    (query_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_query_read(row)

    def delete_query_by_id(self, query_id: str) -> None:
        """Remove a query.  Raises :class:`RecordNotFoundError` if absent."""
        try:
            with self._cursor() as cursor:
                cursor.execute("DELETE FROM queries WHERE id = ?", (query_id,))
                affected = cursor.rowcount
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        if not affected:
            raise RecordNotFoundError("queries", query_id)

    def count_queries_for_form_data(self, form_data_id: str) -> int:
        try:
            with self._cursor() as cursor:
                row = cursor.execute(
                    "SELECT COUNT(*) AS total FROM queries WHERE form_data_id = ?",
                    (form_data_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        return row["total"]

    @staticmethod
    def _row_to_query_read(row: sqlite3.Row) -> QueryRead:
        """Convert a database row to a QueryRead schema instance."""
        return QueryRead(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            form_data_id=row["form_data_id"],
        )
