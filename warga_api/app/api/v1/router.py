"""
Top‑level router for version 1 of the API.

Residents and households are each exposed under two prefixes: the
English ``/resident`` and ``/household`` and the Indonesian ``/warga``
and ``/keluarga`` used by existing clients.  Both prefixes serve
identical endpoints.
"""

from fastapi import APIRouter

from .endpoints import households, residents

router = APIRouter()

router.include_router(residents.router, prefix="/resident", tags=["warga"])
router.include_router(residents.router, prefix="/warga", tags=["warga"], include_in_schema=False)
router.include_router(households.router, prefix="/household", tags=["keluarga"])
router.include_router(households.router, prefix="/keluarga", tags=["keluarga"], include_in_schema=False)
