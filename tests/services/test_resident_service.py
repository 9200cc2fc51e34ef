"""
Test suite for ResidentService.

Covers registration rules, NIK uniqueness, partial updates with the
absent / null distinction, and not-found handling.
"""

from unittest.mock import AsyncMock

import pytest

from warga_api.app.core.exceptions import ConflictError, NotFoundError, ValidationError
from warga_api.app.crud.resident_crud import ResidentCRUD
from warga_api.app.schemas.resident import ResidentCreate, ResidentUpdate
from warga_api.app.services.resident_service import ResidentService


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, resident_service: ResidentService, ani: dict) -> None:
        created = await resident_service.create(ResidentCreate(**ani))
        fetched = await resident_service.get_by_key(ani["nik"])

        for name, value in ani.items():
            assert getattr(created, name) == value
            assert getattr(fetched, name) == value
        assert fetched.keluargaId is None

    @pytest.mark.asyncio
    async def test_create_stores_household_reference(self, resident_service: ResidentService, ani: dict) -> None:
        created = await resident_service.create(ResidentCreate(**ani, keluargaId="3"))

        assert created.keluargaId == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("nik", ["123456789012345", "12345678901234567", "abcdefghijklmnop"])
    async def test_create_rejects_bad_nik(self, resident_service: ResidentService, ani: dict, nik: str) -> None:
        with pytest.raises(ValidationError):
            await resident_service.create(ResidentCreate(**{**ani, "nik": nik}))

    @pytest.mark.asyncio
    async def test_create_rejects_missing_fields(self, resident_service: ResidentService, ani: dict) -> None:
        payload = {**ani, "statusHidup": ""}
        del payload["namaWarga"]

        with pytest.raises(ValidationError) as exc_info:
            await resident_service.create(ResidentCreate(**payload))

        assert "namaWarga" in exc_info.value.message
        assert "statusHidup" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_gender(self, resident_service: ResidentService, ani: dict) -> None:
        with pytest.raises(ValidationError):
            await resident_service.create(ResidentCreate(**{**ani, "jenisKelamin": "P"}))

    @pytest.mark.asyncio
    async def test_duplicate_nik_conflicts_without_write(self, ani: dict) -> None:
        crud = AsyncMock(spec=ResidentCRUD)
        crud.exists.return_value = True
        service = ResidentService(crud)

        with pytest.raises(ConflictError):
            await service.create(ResidentCreate(**ani))

        crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_nik_against_database(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani))

        with pytest.raises(ConflictError):
            await resident_service.create(ResidentCreate(**{**ani, "namaWarga": "Ani Lain"}))

        assert (await resident_service.get_by_key(ani["nik"])).namaWarga == "Ani"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_absent_fields_stay_unchanged(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani, keluargaId=5))

        updated = await resident_service.update(ani["nik"], ResidentUpdate(statusDomisili="Pindah"))

        assert updated.statusDomisili == "Pindah"
        assert updated.namaWarga == "Ani"
        assert updated.keluargaId == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cleared", [None, ""])
    async def test_explicit_empty_household_clears_reference(
        self, resident_service: ResidentService, ani: dict, cleared
    ) -> None:
        await resident_service.create(ResidentCreate(**ani, keluargaId=5))

        updated = await resident_service.update(ani["nik"], ResidentUpdate(keluargaId=cleared))

        assert updated.keluargaId is None

    @pytest.mark.asyncio
    async def test_invalid_gender_aborts_whole_update(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani))

        with pytest.raises(ValidationError):
            await resident_service.update(
                ani["nik"], ResidentUpdate(namaWarga="Ani Baru", jenisKelamin="X")
            )

        assert (await resident_service.get_by_key(ani["nik"])).namaWarga == "Ani"

    @pytest.mark.asyncio
    async def test_explicit_null_name_is_rejected(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani))

        with pytest.raises(ValidationError):
            await resident_service.update(ani["nik"], ResidentUpdate(namaWarga=None))

    @pytest.mark.asyncio
    async def test_update_missing_resident(self, resident_service: ResidentService) -> None:
        with pytest.raises(NotFoundError):
            await resident_service.update("0000000000000000", ResidentUpdate(namaWarga="X"))


class TestReadAndDelete:
    @pytest.mark.asyncio
    async def test_get_missing_resident(self, resident_service: ResidentService) -> None:
        with pytest.raises(NotFoundError):
            await resident_service.get_by_key("not-a-nik")

    @pytest.mark.asyncio
    async def test_list_all_in_insertion_order(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani))
        await resident_service.create(ResidentCreate(**{**ani, "nik": "6543210987654321", "namaWarga": "Bayu"}))

        residents = await resident_service.list_all()

        assert [r.namaWarga for r in residents] == ["Ani", "Bayu"]

    @pytest.mark.asyncio
    async def test_delete(self, resident_service: ResidentService, ani: dict) -> None:
        await resident_service.create(ResidentCreate(**ani))

        await resident_service.delete(ani["nik"])

        with pytest.raises(NotFoundError):
            await resident_service.delete(ani["nik"])
