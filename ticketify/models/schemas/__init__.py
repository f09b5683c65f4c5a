"""Pydantic schema definitions."""

from ticketify.models.schemas.health import HealthResponse, StorageHealth
from ticketify.models.schemas.ticket import (
    DeleteResult,
    SubtaskRead,
    SubtaskWrite,
    TicketCreateRequest,
    TicketDataResponse,
    TicketDeleteResponse,
    TicketListResponse,
    TicketRead,
    TicketUpdateRequest,
)
from ticketify.models.schemas.ticket_view import TicketFilters, TicketStats, TicketWithMetadata

__all__ = [
    "DeleteResult",
    "HealthResponse",
    "StorageHealth",
    "SubtaskRead",
    "SubtaskWrite",
    "TicketCreateRequest",
    "TicketDataResponse",
    "TicketDeleteResponse",
    "TicketFilters",
    "TicketListResponse",
    "TicketRead",
    "TicketStats",
    "TicketUpdateRequest",
    "TicketWithMetadata",
]
