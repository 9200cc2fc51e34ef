"""
Storage gateway for residents (table ``warga``).

Besides the generic operations, provides the two projections used by
household enrichment: a single resident's brief (``nik`` and
``namaWarga``) and the briefs of all residents of a household.
"""

import sqlite3
from typing import Any, Callable, Dict, List, Mapping, Optional

from warga_api.app.core.exceptions import ConflictError

from .base_crud import BaseCRUD, Record


class ResidentCRUD(BaseCRUD):
    """Data access for residents keyed by NIK."""

    table = "warga"
    key_column = "nik"
    fields = {
        "nik": "nik",
        "namaWarga": "nama_warga",
        "jenisKelamin": "jenis_kelamin",
        "statusDomisili": "status_domisili",
        "statusHidup": "status_hidup",
        "keluargaId": "keluarga_id",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    async def create(
        self,
        data: Mapping[str, Any],
        on_integrity_error: Optional[Callable[[sqlite3.IntegrityError], Exception]] = None,
    ) -> Record:
        """Insert a resident.

        A second insert with the same NIK hits the primary key and is
        reported as ``ConflictError``; this covers creates that race past
        the service's existence check.
        """
        return await super().create(
            data,
            on_integrity_error=on_integrity_error or (lambda exc: ConflictError("NIK already exists")),
        )

    async def get_brief(self, nik: str) -> Optional[Dict[str, Any]]:
        """Return ``{nik, namaWarga}`` for one resident, or ``None``."""

        def _query(cursor: sqlite3.Cursor) -> Optional[sqlite3.Row]:
            return cursor.execute(
                "SELECT nik, nama_warga FROM warga WHERE nik = ?",
                (nik,),
            ).fetchone()

        return self.from_row(await self._run(_query))

    async def list_by_household(self, household_id: int) -> List[Dict[str, Any]]:
        """Return ``{nik, namaWarga}`` for every resident of a household."""

        def _query(cursor: sqlite3.Cursor) -> List[sqlite3.Row]:
            return cursor.execute(
                "SELECT nik, nama_warga FROM warga WHERE keluarga_id = ? ORDER BY rowid",
                (household_id,),
            ).fetchall()

        rows = await self._run(_query)
        return [self.from_row(row) for row in rows]
