"""
Base CRUD operations over the SQLite database.

``BaseCRUD`` implements list/get/create/update/delete for a single
table identified by ``table`` and ``key_column``.  Subclasses declare
``fields``, the mapping from API field name to column name, and add
table-specific queries.

The sqlite3 module is blocking, so every statement runs in a worker
thread through ``asyncio.to_thread``.  A missing row is reported as
``None``/``False``; any ``sqlite3.Error`` is re-raised as
``InternalError`` carrying the driver's message.
"""

import asyncio
import logging
import sqlite3
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from warga_api.app.core.db import Database
from warga_api.app.core.exceptions import InternalError


logger = logging.getLogger(__name__)

T = TypeVar("T")

Record = Dict[str, Any]


class BaseCRUD:
    """Generic key-based data access for one table."""

    table: str = ""
    key_column: str = "id"
    # API field name -> storage column name
    fields: Mapping[str, str] = {}

    def __init__(self, db: Database) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Field-name translation
    # ------------------------------------------------------------------

    def to_columns(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Translate API field names to column names.

        Unknown field names are a programming error and raise ``KeyError``.
        """
        return {self.fields[name]: value for name, value in data.items()}

    def from_row(self, row: Optional[sqlite3.Row]) -> Optional[Record]:
        """Translate a database row into a record keyed by API field names."""
        if row is None:
            return None
        columns = row.keys()
        return {name: row[column] for name, column in self.fields.items() if column in columns}

    # ------------------------------------------------------------------
    # Execution helpers
    # ------------------------------------------------------------------

    async def _run(
        self,
        func: Callable[[sqlite3.Cursor], T],
        on_integrity_error: Optional[Callable[[sqlite3.IntegrityError], Exception]] = None,
    ) -> T:
        """Run ``func`` with a fresh cursor in a worker thread.

        ``on_integrity_error`` lets a caller map constraint violations to
        a domain error instead of ``InternalError``.
        """

        def _call() -> T:
            with self.db.get_cursor() as cursor:
                return func(cursor)

        try:
            return await asyncio.to_thread(_call)
        except sqlite3.IntegrityError as exc:
            if on_integrity_error is None:
                logger.error("Constraint violation on %s: %s", self.table, exc)
                raise InternalError("Internal server error", error=str(exc)) from exc
            raise on_integrity_error(exc) from exc
        except sqlite3.Error as exc:
            logger.error("Query on %s failed: %s", self.table, exc)
            raise InternalError("Internal server error", error=str(exc)) from exc

    def _select_one(self, cursor: sqlite3.Cursor, key: Any) -> Optional[sqlite3.Row]:
        return cursor.execute(
            f"SELECT * FROM {self.table} WHERE {self.key_column} = ?",
            (key,),
        ).fetchone()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def list_all(self) -> List[Record]:
        """Return every row ordered by insertion."""

        def _query(cursor: sqlite3.Cursor) -> List[sqlite3.Row]:
            return cursor.execute(f"SELECT * FROM {self.table} ORDER BY rowid").fetchall()

        rows = await self._run(_query)
        return [self.from_row(row) for row in rows]

    async def get(self, key: Any) -> Optional[Record]:
        """Return the row identified by ``key`` or ``None``."""
        row = await self._run(lambda cursor: self._select_one(cursor, key))
        return self.from_row(row)

    async def exists(self, key: Any) -> bool:
        def _query(cursor: sqlite3.Cursor) -> bool:
            return cursor.execute(
                f"SELECT 1 FROM {self.table} WHERE {self.key_column} = ?",
                (key,),
            ).fetchone() is not None

        return await self._run(_query)

    async def create(
        self,
        data: Mapping[str, Any],
        on_integrity_error: Optional[Callable[[sqlite3.IntegrityError], Exception]] = None,
    ) -> Record:
        """Insert a row from API-named ``data`` and return the stored record."""
        values = self.to_columns(data)
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)

        def _insert(cursor: sqlite3.Cursor) -> sqlite3.Row:
            cursor.execute(
                f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                tuple(values.values()),
            )
            if self.key_column in values:
                key = values[self.key_column]
            else:
                key = cursor.lastrowid
            return self._select_one(cursor, key)

        row = await self._run(_insert, on_integrity_error)
        return self.from_row(row)

    async def update(self, key: Any, data: Mapping[str, Any]) -> Optional[Record]:
        """Apply ``data`` to the row identified by ``key``.

        Only the given fields are written.  Returns the updated record,
        or ``None`` if the row does not exist.
        """
        values = self.to_columns(data)

        def _update(cursor: sqlite3.Cursor) -> Optional[sqlite3.Row]:
            if values:
                assignments = ", ".join(f"{column} = ?" for column in values)
                cursor.execute(
                    f"UPDATE {self.table} SET {assignments}, updated_at = CURRENT_TIMESTAMP "
                    f"WHERE {self.key_column} = ?",
                    (*values.values(), key),
                )
            return self._select_one(cursor, key)

        row = await self._run(_update)
        return self.from_row(row)

    async def delete(self, key: Any) -> bool:
        """Delete the row identified by ``key``.  Returns ``False`` if absent."""

        def _delete(cursor: sqlite3.Cursor) -> bool:
            cursor.execute(f"DELETE FROM {self.table} WHERE {self.key_column} = ?", (key,))
            return cursor.rowcount > 0

        return await self._run(_delete)
