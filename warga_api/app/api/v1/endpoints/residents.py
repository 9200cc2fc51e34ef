"""
Resident (warga) endpoints for API v1.

Any authenticated caller may list and read residents.  Creating,
updating and deleting requires one of the privileged roles
(``adminSistem``, ``ketuaRT``, ``ketuaRW`` by default).
"""

from typing import List

from fastapi import APIRouter, Depends, status

from warga_api.app.api.deps import get_resident_service
from warga_api.app.core.security import get_current_user, require_privileged
from warga_api.app.schemas.common import ApiResponse, MessageResponse
from warga_api.app.schemas.resident import ResidentCreate, ResidentRead, ResidentUpdate
from warga_api.app.services.resident_service import ResidentService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[ResidentRead]])
async def list_residents(
    current_user: dict = Depends(get_current_user),
    service: ResidentService = Depends(get_resident_service),
) -> ApiResponse[List[ResidentRead]]:
    """Return all residents."""
    residents = await service.list_all()
    return ApiResponse(message="Warga retrieved successfully", data=residents)


@router.get("/{nik}", response_model=ApiResponse[ResidentRead])
async def get_resident(
    nik: str,
    current_user: dict = Depends(get_current_user),
    service: ResidentService = Depends(get_resident_service),
) -> ApiResponse[ResidentRead]:
    """Return a single resident by NIK (HTTP 404 if unknown)."""
    resident = await service.get_by_key(nik)
    return ApiResponse(message="Warga retrieved successfully", data=resident)


@router.post("", response_model=ApiResponse[ResidentRead], status_code=status.HTTP_201_CREATED)
async def create_resident(
    resident_in: ResidentCreate,
    current_user: dict = Depends(require_privileged()),
    service: ResidentService = Depends(get_resident_service),
) -> ApiResponse[ResidentRead]:
    """Register a resident (privileged roles only).

    Returns HTTP 400 for missing or invalid fields and HTTP 409 if the
    NIK is already registered.
    """
    resident = await service.create(resident_in)
    return ApiResponse(message="Warga created successfully", data=resident)


@router.put("/{nik}", response_model=ApiResponse[ResidentRead])
async def update_resident(
    nik: str,
    resident_in: ResidentUpdate,
    current_user: dict = Depends(require_privileged()),
    service: ResidentService = Depends(get_resident_service),
) -> ApiResponse[ResidentRead]:
    """Update the supplied fields of a resident (privileged roles only)."""
    resident = await service.update(nik, resident_in)
    return ApiResponse(message="Warga updated successfully", data=resident)


@router.delete("/{nik}", response_model=MessageResponse)
async def delete_resident(
    nik: str,
    current_user: dict = Depends(require_privileged()),
    service: ResidentService = Depends(get_resident_service),
) -> MessageResponse:
    """Delete a resident (privileged roles only)."""
    await service.delete(nik)
    return MessageResponse(message="Warga deleted successfully")
