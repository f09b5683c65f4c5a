"""Ticket storage backends."""

from ticketify.core.config import Settings
from ticketify.repositories.base import DuplicateTicketCodeError, TicketRepository
from ticketify.repositories.memory_repository import InMemoryTicketRepository
from ticketify.repositories.postgres_repository import PostgresTicketRepository
from ticketify.repositories.sample_data import sample_tickets


def build_ticket_repository(settings: Settings) -> TicketRepository:
    if settings.storage_backend == "postgres":
        return PostgresTicketRepository(database_url=settings.database_url)
    seed = sample_tickets() if settings.seed_sample_data else ()
    return InMemoryTicketRepository(seed=seed)


__all__ = [
    "DuplicateTicketCodeError",
    "InMemoryTicketRepository",
    "PostgresTicketRepository",
    "TicketRepository",
    "build_ticket_repository",
    "sample_tickets",
]
