"""
Response envelope shared by every endpoint.

Successful responses carry ``data``; failures carry ``error`` with the
underlying message when one is available.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel


DataT = TypeVar("DataT")


class MessageResponse(BaseModel):
    """Envelope without payload, used by deletes and errors."""

    success: bool = True
    message: str


class ApiResponse(MessageResponse, Generic[DataT]):
    """Envelope with a typed ``data`` payload."""

    data: Optional[DataT] = None


class ErrorResponse(MessageResponse):
    success: bool = False
    error: Optional[str] = None
