"""Storage gateway for households (table ``keluarga``)."""

from typing import Any, Mapping, Optional

from warga_api.app.core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER

from .base_crud import BaseCRUD, Record


def _storable_id(key: Any) -> bool:
    # An id outside the INTEGER range cannot name a row.
    return isinstance(key, int) and SQLITE_MIN_INTEGER <= key <= SQLITE_MAX_INTEGER


class HouseholdCRUD(BaseCRUD):
    """Data access for households keyed by their generated integer id."""

    table = "keluarga"
    key_column = "id"
    fields = {
        "id": "id",
        "namaKeluarga": "nama_keluarga",
        "jumlahAnggota": "jumlah_anggota",
        "rumahId": "rumah_id",
        "kepalaKeluargaId": "kepala_keluarga_id",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    async def get(self, key: Any) -> Optional[Record]:
        if not _storable_id(key):
            return None
        return await super().get(key)

    async def exists(self, key: Any) -> bool:
        if not _storable_id(key):
            return False
        return await super().exists(key)

    async def update(self, key: Any, data: Mapping[str, Any]) -> Optional[Record]:
        if not _storable_id(key):
            return None
        return await super().update(key, data)

    async def delete(self, key: Any) -> bool:
        if not _storable_id(key):
            return False
        return await super().delete(key)
