"""
Business logic for residents (warga).

Residents are keyed by their NIK.  Creation validates every required
field before touching storage and refuses NIKs that are already
registered.  Updates are partial: only the fields present in the
request body are written, and all of them are validated before the
single UPDATE is issued, so a rejected request never leaves a partial
change behind.
"""

import logging
from typing import Any, Dict, List

from warga_api.app.core.exceptions import ConflictError, NotFoundError
from warga_api.app.crud.resident_crud import ResidentCRUD
from warga_api.app.schemas.resident import ResidentCreate, ResidentRead, ResidentUpdate

from . import validators


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("nik", "namaWarga", "jenisKelamin", "statusDomisili", "statusHidup")
TEXT_FIELDS = ("namaWarga", "statusDomisili", "statusHidup")


class ResidentService:
    """Service for registering, reading, updating and removing residents."""

    def __init__(self, residents: ResidentCRUD) -> None:
        self.residents = residents

    async def list_all(self) -> List[ResidentRead]:
        """Return every resident as stored, without enrichment."""
        rows = await self.residents.list_all()
        return [ResidentRead(**row) for row in rows]

    async def get_by_key(self, nik: str) -> ResidentRead:
        """Return the resident with ``nik``.

        The NIK is looked up verbatim; a malformed NIK simply is not found.
        """
        row = await self.residents.get(nik)
        if row is None:
            raise NotFoundError("Warga not found")
        return ResidentRead(**row)

    async def create(self, data: ResidentCreate) -> ResidentRead:
        """Register a new resident.

        Raises ``ValidationError`` for missing or malformed fields and
        ``ConflictError`` if the NIK is already registered.
        """
        payload = data.model_dump()
        validators.require_fields(payload, REQUIRED_FIELDS)
        validators.validate_nik(data.nik)
        validators.validate_gender(data.jenisKelamin)
        household_id = validators.parse_reference("keluargaId", data.keluargaId)

        record: Dict[str, Any] = {name: payload[name] for name in REQUIRED_FIELDS}
        # No household: leave the column out rather than writing a default.
        if household_id is not None:
            record["keluargaId"] = household_id

        if await self.residents.exists(data.nik):
            logger.info("Rejected duplicate NIK %s", data.nik)
            raise ConflictError("NIK already exists")

        created = await self.residents.create(record)
        logger.info("Created warga %s", data.nik)
        return ResidentRead(**created)

    async def update(self, nik: str, data: ResidentUpdate) -> ResidentRead:
        """Apply the fields present in ``data`` to the resident ``nik``.

        ``keluargaId`` sent as ``null`` (or ``""``) clears the household
        reference; leaving it out keeps the current value.
        """
        if not await self.residents.exists(nik):
            raise NotFoundError("Warga not found")

        provided = data.model_fields_set
        changes: Dict[str, Any] = {}
        for name in TEXT_FIELDS:
            if name in provided:
                changes[name] = validators.validate_text(name, getattr(data, name))
        if "jenisKelamin" in provided:
            changes["jenisKelamin"] = validators.validate_gender(data.jenisKelamin)
        if "keluargaId" in provided:
            changes["keluargaId"] = validators.parse_reference("keluargaId", data.keluargaId)

        updated = await self.residents.update(nik, changes)
        if updated is None:
            # Deleted between the existence check and the update.
            raise NotFoundError("Warga not found")
        logger.info("Updated warga %s fields=%s", nik, sorted(changes))
        return ResidentRead(**updated)

    async def delete(self, nik: str) -> None:
        """Remove the resident ``nik``; raises ``NotFoundError`` if absent."""
        if not await self.residents.delete(nik):
            raise NotFoundError("Warga not found")
        logger.info("Deleted warga %s", nik)
