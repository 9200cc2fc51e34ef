"""
Exception hierarchy for the Warga API.

Services and the storage gateway raise these errors; the handlers
registered in ``main.create_app`` turn them into the JSON envelope
``{success: false, message, error?}`` with the matching HTTP status.
"""

from typing import Optional

from fastapi import status


class WargaAPIError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        self.message = message
        self.error = error
        super().__init__(message)


class ValidationError(WargaAPIError):
    """Raised when a request payload is missing fields or has invalid values."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(WargaAPIError):
    """Raised when the bearer token is missing, malformed or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(WargaAPIError):
    """Raised when the authenticated role may not perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(WargaAPIError):
    """Raised when a resident or household does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(WargaAPIError):
    """Raised when a resident with the same NIK is already registered."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(WargaAPIError):
    """Raised for storage failures and other unexpected conditions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
