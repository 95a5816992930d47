"""SQLite document sink.

Documents are stored as JSON text, one row per publication, and read back
in publication order.
"""

import asyncio
import json
import sqlite3
import threading
from collections.abc import AsyncIterable, AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

import aiosqlite

from samplemetric.core.encoding.ndjson import encode_document
from samplemetric.core.models import MetricDocument

_MEMORY = ":memory:"

_DOCUMENTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sample_label TEXT,
    body TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_documents_label ON documents(sample_label);
"""

_INSERT_DOCUMENT = """
INSERT INTO documents (sample_label, body) VALUES (?, ?)
"""

_SELECT_DOCUMENTS = """
SELECT body FROM documents ORDER BY id ASC
"""

_SELECT_DOCUMENTS_BY_LABEL = """
SELECT body FROM documents WHERE sample_label = ? ORDER BY id ASC
"""

_COUNT_DOCUMENTS = """
SELECT COUNT(*) FROM documents
"""

_CLEAR_DOCUMENTS = """
DELETE FROM documents
"""


def _to_row(document: MetricDocument) -> tuple[str | None, str]:
    label = document.get("SampleLabel")
    return (label if isinstance(label, str) else None, encode_document(document))


def _from_row(row: sqlite3.Row | aiosqlite.Row | tuple[str]) -> MetricDocument:
    return MetricDocument.from_mapping(json.loads(row[0]))


class SQLiteMetricSink:
    """SQLite implementation of MetricSinkPort.

    Async methods use aiosqlite; the ``*_sync`` variants use the standard
    sqlite3 module for threaded hosts without an event loop. Both share the
    same file for file-based databases. For :memory: databases each side
    keeps its own persistent connection, so they do NOT share data.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._initialized = False
        self._init_lock: asyncio.Lock | None = None
        self._persistent_conn: aiosqlite.Connection | None = None
        self._sync_initialized = False
        self._sync_lock = threading.Lock()
        self._sync_conn: sqlite3.Connection | None = None

    @property
    def _in_memory(self) -> bool:
        return self._db_path == _MEMORY

    # --- async side ---

    def _get_lock(self) -> asyncio.Lock:
        """Get or create the initialization lock (lazy to avoid event loop issues)."""
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        async with self._get_lock():
            if self._initialized:
                return
            if self._in_memory:
                self._persistent_conn = await aiosqlite.connect(_MEMORY)
                await self._persistent_conn.executescript(_DOCUMENTS_SCHEMA)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(_DOCUMENTS_SCHEMA)
            self._initialized = True

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        await self._ensure_initialized()
        if self._in_memory:
            if self._persistent_conn is None:
                raise RuntimeError("Memory database connection not initialized")
            yield self._persistent_conn
            return
        db = await aiosqlite.connect(self._db_path)
        try:
            yield db
        finally:
            await db.close()

    async def write(self, document: MetricDocument) -> None:
        """Publish a document."""
        async with self._connection() as db:
            await db.execute(_INSERT_DOCUMENT, _to_row(document))
            await db.commit()

    async def read(
        self, sample_label: str | None = None
    ) -> AsyncIterable[MetricDocument]:
        """Read documents in publication order, optionally for one sample label."""
        if sample_label is None:
            query, params = _SELECT_DOCUMENTS, ()
        else:
            query, params = _SELECT_DOCUMENTS_BY_LABEL, (sample_label,)
        async with self._connection() as db:
            async with db.execute(query, params) as cursor:
                async for row in cursor:
                    yield _from_row(row)

    async def count(self) -> int:
        """Return the number of published documents."""
        async with self._connection() as db:
            async with db.execute(_COUNT_DOCUMENTS) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def clear(self) -> None:
        """Drop all published documents."""
        async with self._connection() as db:
            await db.execute(_CLEAR_DOCUMENTS)
            await db.commit()

    async def close(self) -> None:
        """Close the persistent connection (for :memory: databases)."""
        if self._persistent_conn is not None:
            await self._persistent_conn.close()
            self._persistent_conn = None
            self._initialized = False

    # --- sync side ---

    def _ensure_initialized_sync(self) -> None:
        if self._sync_initialized:
            return
        with self._sync_lock:
            if self._sync_initialized:
                return
            if self._in_memory:
                self._sync_conn = sqlite3.connect(_MEMORY, check_same_thread=False)
                self._sync_conn.executescript(_DOCUMENTS_SCHEMA)
            else:
                with sqlite3.connect(self._db_path) as db:
                    db.execute("PRAGMA journal_mode=WAL")
                    db.executescript(_DOCUMENTS_SCHEMA)
            self._sync_initialized = True

    @contextmanager
    def _sync_connection(self) -> Iterator[sqlite3.Connection]:
        self._ensure_initialized_sync()
        if self._in_memory:
            if self._sync_conn is None:
                raise RuntimeError("Sync memory database connection not initialized")
            with self._sync_lock:
                yield self._sync_conn
            return
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
        finally:
            conn.close()

    def write_sync(self, document: MetricDocument) -> None:
        """Synchronous write for threaded hosts."""
        with self._sync_connection() as conn:
            conn.execute(_INSERT_DOCUMENT, _to_row(document))
            conn.commit()

    def read_sync(self, sample_label: str | None = None) -> list[MetricDocument]:
        """Synchronous read, in publication order."""
        with self._sync_connection() as conn:
            if sample_label is None:
                cursor = conn.execute(_SELECT_DOCUMENTS)
            else:
                cursor = conn.execute(_SELECT_DOCUMENTS_BY_LABEL, (sample_label,))
            return [_from_row(row) for row in cursor]

    def clear_sync(self) -> None:
        """Synchronous clear."""
        with self._sync_connection() as conn:
            conn.execute(_CLEAR_DOCUMENTS)
            conn.commit()
