"""
Application package initializer.

The project is split by layer rather than by domain: ``core`` holds
configuration, logging, errors, the database handle and security;
``crud`` is the storage gateway; ``services`` hold validation and
business rules for residents (warga) and households (keluarga);
``schemas`` define the pydantic payloads and ``api/v1`` exposes the
routers.
"""

from .main import app  # noqa: F401
