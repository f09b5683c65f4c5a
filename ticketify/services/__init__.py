"""Business services and read projections."""

from ticketify.services.health_service import HealthService
from ticketify.services.ticket_metadata import compute_stats, derive_metadata
from ticketify.services.ticket_query import filter_tickets, group_by_status, overdue_tickets
from ticketify.services.ticket_service import TicketService

__all__ = [
    "HealthService",
    "TicketService",
    "compute_stats",
    "derive_metadata",
    "filter_tickets",
    "group_by_status",
    "overdue_tickets",
]
