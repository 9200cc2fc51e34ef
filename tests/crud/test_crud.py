"""
Tests for the storage gateway.

Runs against a real SQLite file so column translation, absence
handling and constraint mapping are exercised end to end.
"""

import pytest

from warga_api.app.core.db import Database
from warga_api.app.core.exceptions import ConflictError, InternalError
from warga_api.app.crud.household_crud import HouseholdCRUD
from warga_api.app.crud.resident_crud import ResidentCRUD


RESIDENT = {
    "nik": "3201010101010001",
    "namaWarga": "Budi",
    "jenisKelamin": "Laki-laki",
    "statusDomisili": "Tetap",
    "statusHidup": "Hidup",
}


class TestFieldTranslation:
    def test_to_columns_maps_api_names(self, resident_crud: ResidentCRUD) -> None:
        assert resident_crud.to_columns({"namaWarga": "Budi", "keluargaId": 3}) == {
            "nama_warga": "Budi",
            "keluarga_id": 3,
        }

    def test_to_columns_rejects_unknown_field(self, resident_crud: ResidentCRUD) -> None:
        with pytest.raises(KeyError):
            resident_crud.to_columns({"alamat": "Jl. Mawar"})

    def test_from_row_none_stays_none(self, household_crud: HouseholdCRUD) -> None:
        assert household_crud.from_row(None) is None


class TestResidentCRUD:
    @pytest.mark.asyncio
    async def test_create_returns_api_named_record(self, resident_crud: ResidentCRUD) -> None:
        created = await resident_crud.create(RESIDENT)

        for name, value in RESIDENT.items():
            assert created[name] == value
        assert created["keluargaId"] is None
        assert created["createdAt"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, resident_crud: ResidentCRUD) -> None:
        assert await resident_crud.get("0000000000000000") is None
        assert await resident_crud.exists("0000000000000000") is False

    @pytest.mark.asyncio
    async def test_duplicate_nik_raises_conflict(self, resident_crud: ResidentCRUD) -> None:
        await resident_crud.create(RESIDENT)

        with pytest.raises(ConflictError):
            await resident_crud.create({**RESIDENT, "namaWarga": "Budi Kedua"})

        rows = await resident_crud.list_all()
        assert [row["namaWarga"] for row in rows] == ["Budi"]

    @pytest.mark.asyncio
    async def test_update_writes_only_given_fields(self, resident_crud: ResidentCRUD) -> None:
        await resident_crud.create({**RESIDENT, "keluargaId": 4})

        updated = await resident_crud.update(RESIDENT["nik"], {"statusHidup": "Meninggal"})

        assert updated["statusHidup"] == "Meninggal"
        assert updated["namaWarga"] == "Budi"
        assert updated["keluargaId"] == 4

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, resident_crud: ResidentCRUD) -> None:
        assert await resident_crud.update("0000000000000000", {"namaWarga": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete_reports_whether_row_existed(self, resident_crud: ResidentCRUD) -> None:
        await resident_crud.create(RESIDENT)

        assert await resident_crud.delete(RESIDENT["nik"]) is True
        assert await resident_crud.delete(RESIDENT["nik"]) is False

    @pytest.mark.asyncio
    async def test_member_and_brief_projections(self, resident_crud: ResidentCRUD) -> None:
        await resident_crud.create({**RESIDENT, "keluargaId": 1})
        await resident_crud.create({**RESIDENT, "nik": "3201010101010002", "namaWarga": "Citra", "keluargaId": 1})
        await resident_crud.create({**RESIDENT, "nik": "3201010101010003", "namaWarga": "Dodi", "keluargaId": 2})

        members = await resident_crud.list_by_household(1)
        brief = await resident_crud.get_brief("3201010101010002")

        assert members == [
            {"nik": "3201010101010001", "namaWarga": "Budi"},
            {"nik": "3201010101010002", "namaWarga": "Citra"},
        ]
        assert brief == {"nik": "3201010101010002", "namaWarga": "Citra"}
        assert await resident_crud.get_brief("9999999999999999") is None


class TestHouseholdCRUD:
    @pytest.mark.asyncio
    async def test_create_generates_id(self, household_crud: HouseholdCRUD) -> None:
        first = await household_crud.create({"namaKeluarga": "Keluarga A", "jumlahAnggota": 2})
        second = await household_crud.create({"namaKeluarga": "Keluarga B", "jumlahAnggota": 5})

        assert second["id"] > first["id"]
        assert first["rumahId"] is None
        assert first["kepalaKeluargaId"] is None

    @pytest.mark.asyncio
    async def test_update_can_clear_reference(self, household_crud: HouseholdCRUD) -> None:
        created = await household_crud.create(
            {"namaKeluarga": "Keluarga A", "jumlahAnggota": 2, "rumahId": 7}
        )

        updated = await household_crud.update(created["id"], {"rumahId": None})

        assert updated["rumahId"] is None
        assert updated["namaKeluarga"] == "Keluarga A"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", [2 ** 63, -(2 ** 63) - 1, 10 ** 20])
    async def test_out_of_range_id_is_absent(self, household_crud: HouseholdCRUD, key: int) -> None:
        assert await household_crud.get(key) is None
        assert await household_crud.exists(key) is False
        assert await household_crud.update(key, {"namaKeluarga": "X"}) is None
        assert await household_crud.delete(key) is False


class TestStorageFailures:
    @pytest.mark.asyncio
    async def test_sqlite_error_becomes_internal_error(self, tmp_path) -> None:
        # No migrations applied, so the table does not exist.
        crud = ResidentCRUD(Database(str(tmp_path / "empty.db")))

        with pytest.raises(InternalError) as exc_info:
            await crud.list_all()

        assert "no such table" in exc_info.value.error
