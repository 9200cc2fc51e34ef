"""
Shared test fixtures.

Provides: a migrated SQLite database per test, CRUD and service
instances bound to it, a FastAPI test client and bearer-token headers
for privileged and ordinary callers.
"""

import pytest
from fastapi.testclient import TestClient

from warga_api.app.core.db import Database
from warga_api.app.core.security import create_access_token
from warga_api.app.crud.household_crud import HouseholdCRUD
from warga_api.app.crud.resident_crud import ResidentCRUD
from warga_api.app.main import create_app
from warga_api.app.services.household_service import HouseholdService
from warga_api.app.services.resident_service import ResidentService


@pytest.fixture
def database(tmp_path) -> Database:
    """Database file in a temporary directory with all migrations applied."""
    db = Database(str(tmp_path / "warga_test.db"))
    db.init_db()
    return db


@pytest.fixture
def resident_crud(database: Database) -> ResidentCRUD:
    return ResidentCRUD(database)


@pytest.fixture
def household_crud(database: Database) -> HouseholdCRUD:
    return HouseholdCRUD(database)


@pytest.fixture
def resident_service(resident_crud: ResidentCRUD) -> ResidentService:
    return ResidentService(resident_crud)


@pytest.fixture
def household_service(household_crud: HouseholdCRUD, resident_crud: ResidentCRUD) -> HouseholdService:
    return HouseholdService(household_crud, resident_crud)


@pytest.fixture
def client(database: Database):
    """Test client for an app wired to the temporary database."""
    app = create_app(database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict:
    token = create_access_token({"sub": "admin@example.com", "role": "adminSistem"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def rt_headers() -> dict:
    token = create_access_token({"sub": "ketua.rt@example.com", "role": "ketuaRT"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def resident_headers() -> dict:
    """A caller who is authenticated but holds no privileged role."""
    token = create_access_token({"sub": "warga@example.com", "role": "warga"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ani() -> dict:
    return {
        "nik": "1234567890123456",
        "namaWarga": "Ani",
        "jenisKelamin": "Perempuan",
        "statusDomisili": "Tetap",
        "statusHidup": "Hidup",
    }
