from functools import lru_cache

from ticketify.core.config import get_settings
from ticketify.repositories import TicketRepository, build_ticket_repository


@lru_cache
def get_ticket_repository() -> TicketRepository:
    # One repository per process so in-memory tickets survive across requests.
    return build_ticket_repository(get_settings())
