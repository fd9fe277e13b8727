"""Common Pydantic schemas used across the API."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Canonical error body returned by every failing endpoint."""

    success: bool = False
    message: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str
