"""
Pydantic models for resident (warga) records.

``ResidentUpdate`` relies on ``model_fields_set`` to tell a field that
was left out of the request from one that was sent as ``null``: the
first leaves the stored value alone, the second clears it.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ResidentCreate(BaseModel):
    """Payload for registering a resident."""

    nik: Optional[str] = Field(None, examples=["3201012345678901"], description="16-digit national identity number")
    namaWarga: Optional[str] = Field(None, examples=["Ani Suryani"])
    jenisKelamin: Optional[str] = Field(None, examples=["Perempuan"], description="Laki-laki or Perempuan")
    statusDomisili: Optional[str] = Field(None, examples=["Tetap"])
    statusHidup: Optional[str] = Field(None, examples=["Hidup"])
    keluargaId: Any = Field(None, examples=[1], description="Household id; omit when the resident has none")


class ResidentUpdate(BaseModel):
    """Payload for updating a resident.

    All fields are optional; only fields present in the request body are
    applied.  ``keluargaId`` sent as ``null`` or ``""`` removes the
    resident from their household.  The NIK itself cannot be changed.
    """

    namaWarga: Optional[str] = None
    jenisKelamin: Optional[str] = None
    statusDomisili: Optional[str] = None
    statusHidup: Optional[str] = None
    keluargaId: Any = None


class ResidentBrief(BaseModel):
    """Identity and name only, as embedded in household responses."""

    nik: str
    namaWarga: str


class ResidentRead(BaseModel):
    """A resident as stored."""

    nik: str
    namaWarga: str
    jenisKelamin: str
    statusDomisili: str
    statusHidup: str
    keluargaId: Optional[int] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
