"""
Household (keluarga) endpoints for API v1.

List and detail responses include the resolved head of household
(``kepalaKeluarga``) and member list (``anggota``); create and update
return the household row as stored.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from warga_api.app.api.deps import get_household_service
from warga_api.app.core.security import get_current_user, require_privileged
from warga_api.app.schemas.common import ApiResponse, MessageResponse
from warga_api.app.schemas.household import (
    HouseholdCreate,
    HouseholdDetail,
    HouseholdRead,
    HouseholdUpdate,
)
from warga_api.app.services.household_service import HouseholdService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[HouseholdDetail]])
async def list_households(
    current_user: dict = Depends(get_current_user),
    service: HouseholdService = Depends(get_household_service),
) -> ApiResponse[List[HouseholdDetail]]:
    households = await service.list_all()
    return ApiResponse(message="Keluarga retrieved successfully", data=households)


@router.get("/{household_id}", response_model=ApiResponse[HouseholdDetail])
async def get_household(
    household_id: str,
    current_user: dict = Depends(get_current_user),
    service: HouseholdService = Depends(get_household_service),
) -> ApiResponse[HouseholdDetail]:
    household = await service.get_by_id(household_id)
    return ApiResponse(message="Keluarga retrieved successfully", data=household)


@router.post("", response_model=ApiResponse[HouseholdRead], status_code=status.HTTP_201_CREATED)
async def create_household(
    household_in: HouseholdCreate,
    current_user: dict = Depends(require_privileged()),
    service: HouseholdService = Depends(get_household_service),
) -> ApiResponse[HouseholdRead]:
    """Create a household (privileged roles only)."""
    household = await service.create(household_in)
    return ApiResponse(message="Keluarga created successfully", data=household)


@router.put("/{household_id}", response_model=ApiResponse[HouseholdRead])
async def update_household(
    household_id: str,
    household_in: HouseholdUpdate,
    current_user: dict = Depends(require_privileged()),
    service: HouseholdService = Depends(get_household_service),
) -> ApiResponse[HouseholdRead]:
    """Update the supplied fields of a household (privileged roles only)."""
    household = await service.update(household_id, household_in)
    return ApiResponse(message="Keluarga updated successfully", data=household)


@router.delete("/{household_id}", response_model=MessageResponse)
async def delete_household(
    household_id: str,
    current_user: dict = Depends(require_privileged()),
    service: HouseholdService = Depends(get_household_service),
) -> MessageResponse:
    """Delete a household (privileged roles only).  Residents are not touched."""
    await service.delete(household_id)
    return MessageResponse(message="Keluarga deleted successfully")
