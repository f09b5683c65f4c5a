from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from ticketify.core.config import StorageBackend


class StorageHealth(BaseModel):
    backend: StorageBackend
    connected: bool
    ticket_count: int | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    service: str = "ticketify-api"
    environment: str
    storage: StorageHealth
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
