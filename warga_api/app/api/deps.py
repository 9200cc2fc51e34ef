"""
FastAPI dependencies that assemble services per request.

The ``Database`` handle lives on ``app.state`` (set by ``create_app``);
services and CRUD objects are thin wrappers around it and are built on
demand.  Tests replace these functions through
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from warga_api.app.core.db import Database
from warga_api.app.crud.household_crud import HouseholdCRUD
from warga_api.app.crud.resident_crud import ResidentCRUD
from warga_api.app.services.household_service import HouseholdService
from warga_api.app.services.resident_service import ResidentService


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_resident_service(db: Database = Depends(get_database)) -> ResidentService:
    return ResidentService(ResidentCRUD(db))


def get_household_service(db: Database = Depends(get_database)) -> HouseholdService:
    return HouseholdService(HouseholdCRUD(db), ResidentCRUD(db))
