"""
Pydantic models for household (keluarga) records.

Households are returned in two shapes: ``HouseholdRead`` is the row as
stored (returned by create and update) and ``HouseholdDetail`` adds
the resolved head of household and the member list (returned by list
and get).
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from .resident import ResidentBrief


# Older clients send the head reference as ``kepala_Keluarga_Id``.
_HEAD_ALIASES = AliasChoices("kepalaKeluargaId", "kepala_Keluarga_Id")


class HouseholdCreate(BaseModel):
    """Payload for creating a household."""

    namaKeluarga: Optional[str] = Field(None, examples=["Keluarga Ani"])
    jumlahAnggota: Any = Field(None, examples=[3], description="Declared number of members, at least 1")
    rumahId: Any = Field(None, examples=[12], description="Dwelling id")
    kepalaKeluargaId: Optional[str] = Field(
        None,
        validation_alias=_HEAD_ALIASES,
        examples=["3201012345678901"],
        description="NIK of the head of household",
    )


class HouseholdUpdate(BaseModel):
    """Payload for updating a household.

    Only fields present in the request are applied.  ``rumahId`` and
    ``kepalaKeluargaId`` sent as ``null`` or ``""`` clear the reference.
    """

    namaKeluarga: Optional[str] = None
    jumlahAnggota: Any = None
    rumahId: Any = None
    kepalaKeluargaId: Optional[str] = Field(None, validation_alias=_HEAD_ALIASES)


class HouseholdRead(BaseModel):
    """A household as stored."""

    id: int
    namaKeluarga: str
    jumlahAnggota: int
    rumahId: Optional[int] = None
    kepalaKeluargaId: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class HouseholdDetail(HouseholdRead):
    """A household with its head and members resolved at read time."""

    kepalaKeluarga: Optional[ResidentBrief] = None
    anggota: List[ResidentBrief] = Field(default_factory=list)
