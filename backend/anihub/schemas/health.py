"""Health check schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str
    message: str
    timestamp: datetime
    database: str
    redis: Optional[str] = None
