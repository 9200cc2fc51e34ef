"""
SQLite database integration and simple migration system.

``Database`` is the shared storage handle.  It is built once by
``create_app`` and passed to the storage gateway, so nothing in the
application reaches for a module-level connection.  Each call to
``get_connection`` opens a fresh connection; callers close it when
done, which keeps connections from being shared between the worker
threads the gateway runs its queries on.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import settings


logger = logging.getLogger(__name__)

# Range of an SQLite INTEGER column; larger Python ints cannot be bound.
SQLITE_MIN_INTEGER = -(2 ** 63)
SQLITE_MAX_INTEGER = 2 ** 63 - 1


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: households and residents.  Reference columns carry no
    # FOREIGN KEY clause: deleting a household must not fail or cascade
    # while residents still point at it.
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS keluarga (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            nama_keluarga TEXT NOT NULL,
            jumlah_anggota INTEGER NOT NULL CHECK (jumlah_anggota >= 1),
            rumah_id INTEGER,
            kepala_keluarga_id TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS warga (
            nik TEXT PRIMARY KEY,
            nama_warga TEXT NOT NULL,
            jenis_kelamin TEXT NOT NULL,
            status_domisili TEXT NOT NULL,
            status_hidup TEXT NOT NULL,
            keluarga_id INTEGER,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: member lookups filter residents by household.
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_warga_keluarga_id ON warga(keluarga_id);
        CREATE INDEX IF NOT EXISTS idx_keluarga_kepala ON keluarga(kepala_keluarga_id);
        """,
    ),
]


def resolve_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are returned unchanged; relative
    paths are resolved against the project root.
    """
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


class Database:
    """Handle to the SQLite database shared by the whole process."""

    def __init__(self, db_url: Optional[str] = None) -> None:
        self.path = resolve_database_path(db_url or settings.database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  No type detection is enabled; values come back as
        stored.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the database if needed and apply pending migrations."""
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s", version)
                    current_version = version
