"""
Storage gateway.

One CRUD class per table.  Each method issues a single key-based
statement and translates between API field names (``namaWarga``) and
storage column names (``nama_warga``), so services never see column
names.
"""

from .base_crud import BaseCRUD
from .household_crud import HouseholdCRUD
from .resident_crud import ResidentCRUD

__all__ = ["BaseCRUD", "HouseholdCRUD", "ResidentCRUD"]
