"""Async client and session cache for the ticket API."""

from ticketify.client.api import TicketApiClient
from ticketify.client.errors import (
    HttpError,
    NetworkError,
    NotFoundError,
    TicketClientError,
    ValidationError,
)
from ticketify.client.store import TicketStore

__all__ = [
    "HttpError",
    "NetworkError",
    "NotFoundError",
    "TicketApiClient",
    "TicketClientError",
    "TicketStore",
    "ValidationError",
]
