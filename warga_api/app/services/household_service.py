"""
Business logic for households (keluarga).

Reads enrich each household with its head (``kepalaKeluarga``) and its
members (``anggota``).  Neither is stored on the household row: the head
is looked up by the NIK in ``kepalaKeluargaId`` and the members are the
residents whose ``keluargaId`` points at the household.  The two lookups
are independent and run concurrently, and a list request enriches all
households concurrently.

Deleting a household does not touch its residents; their ``keluargaId``
keeps pointing at the removed id.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from warga_api.app.core.exceptions import NotFoundError
from warga_api.app.crud.household_crud import HouseholdCRUD
from warga_api.app.crud.resident_crud import ResidentCRUD
from warga_api.app.schemas.household import (
    HouseholdCreate,
    HouseholdDetail,
    HouseholdRead,
    HouseholdUpdate,
)

from . import validators


logger = logging.getLogger(__name__)


def _household_key(household_id: Union[int, str]) -> int:
    """Turn a path id into a key; anything that is not a number cannot exist."""
    if isinstance(household_id, int):
        return household_id
    if (
        not validators.DIGITS_PATTERN.fullmatch(household_id)
        or len(household_id) > validators.MAX_INTEGER_DIGITS
    ):
        raise NotFoundError("Keluarga not found")
    return int(household_id)


class HouseholdService:
    """Service for managing households and resolving their residents."""

    def __init__(self, households: HouseholdCRUD, residents: ResidentCRUD) -> None:
        self.households = households
        self.residents = residents

    async def _resolve_head(self, head_nik: Optional[str]) -> Optional[Dict[str, Any]]:
        if not head_nik:
            return None
        return await self.residents.get_brief(head_nik)

    async def _enrich(self, household: Dict[str, Any]) -> HouseholdDetail:
        head, members = await asyncio.gather(
            self._resolve_head(household.get("kepalaKeluargaId")),
            self.residents.list_by_household(household["id"]),
        )
        return HouseholdDetail(**household, kepalaKeluarga=head, anggota=members)

    async def list_all(self) -> List[HouseholdDetail]:
        """Return every household with its head and members resolved."""
        households = await self.households.list_all()
        return list(await asyncio.gather(*(self._enrich(row) for row in households)))

    async def get_by_id(self, household_id: Union[int, str]) -> HouseholdDetail:
        row = await self.households.get(_household_key(household_id))
        if row is None:
            raise NotFoundError("Keluarga not found")
        return await self._enrich(row)

    async def create(self, data: HouseholdCreate) -> HouseholdRead:
        """Create a household.

        ``namaKeluarga`` and ``jumlahAnggota`` are required and the member
        count must be a number of at least 1.  ``rumahId`` and
        ``kepalaKeluargaId`` are stored only when given.
        """
        validators.require_fields(data.model_dump(), ("namaKeluarga", "jumlahAnggota"))
        record: Dict[str, Any] = {
            "namaKeluarga": data.namaKeluarga,
            "jumlahAnggota": validators.parse_member_count(data.jumlahAnggota),
        }
        dwelling_id = validators.parse_reference("rumahId", data.rumahId)
        if dwelling_id is not None:
            record["rumahId"] = dwelling_id
        head_nik = validators.parse_text_reference(data.kepalaKeluargaId)
        if head_nik is not None:
            record["kepalaKeluargaId"] = head_nik

        created = await self.households.create(record)
        logger.info("Created keluarga %s", created["id"])
        return HouseholdRead(**created)

    async def update(self, household_id: Union[int, str], data: HouseholdUpdate) -> HouseholdRead:
        """Apply the fields present in ``data`` to a household.

        An invalid ``jumlahAnggota`` rejects the whole request.  ``rumahId``
        and ``kepalaKeluargaId`` sent empty clear the reference.
        """
        household_id = _household_key(household_id)
        if not await self.households.exists(household_id):
            raise NotFoundError("Keluarga not found")

        provided = data.model_fields_set
        changes: Dict[str, Any] = {}
        if "namaKeluarga" in provided:
            changes["namaKeluarga"] = validators.validate_text("namaKeluarga", data.namaKeluarga)
        if "jumlahAnggota" in provided:
            changes["jumlahAnggota"] = validators.parse_member_count(data.jumlahAnggota)
        if "rumahId" in provided:
            changes["rumahId"] = validators.parse_reference("rumahId", data.rumahId)
        if "kepalaKeluargaId" in provided:
            changes["kepalaKeluargaId"] = validators.parse_text_reference(data.kepalaKeluargaId)

        updated = await self.households.update(household_id, changes)
        if updated is None:
            raise NotFoundError("Keluarga not found")
        logger.info("Updated keluarga %s fields=%s", household_id, sorted(changes))
        return HouseholdRead(**updated)

    async def delete(self, household_id: Union[int, str]) -> None:
        """Delete a household.  Member residents are left as they are."""
        household_id = _household_key(household_id)
        if not await self.households.delete(household_id):
            raise NotFoundError("Keluarga not found")
        logger.info("Deleted keluarga %s", household_id)
