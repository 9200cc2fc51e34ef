"""
Service layer.

Each service validates input for one domain and drives the storage
gateway.  Services hold no state of their own beyond the CRUD objects
they are constructed with, so a new instance per request is cheap.
"""

from .household_service import HouseholdService
from .resident_service import ResidentService

__all__ = ["HouseholdService", "ResidentService"]
