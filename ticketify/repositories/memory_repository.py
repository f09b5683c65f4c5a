import logging
from collections.abc import Iterable
from copy import deepcopy

from ticketify.models.entities import TicketEntity
from ticketify.repositories.base import DuplicateTicketCodeError

logger = logging.getLogger(__name__)


class InMemoryTicketRepository:
    """Process-local ticket storage backed by an insertion-ordered dict.

    Entities are copied on the way in and out so callers never share
    mutable state with the store.
    """

    backend = "memory"

    def __init__(self, seed: Iterable[TicketEntity] = ()) -> None:
        self._tickets: dict[str, TicketEntity] = {}
        for ticket in seed:
            self.insert(ticket)

    def list(self) -> list[TicketEntity]:
        return [deepcopy(ticket) for ticket in self._tickets.values()]

    def get_by_id(self, ticket_id: str) -> TicketEntity | None:
        ticket = self._tickets.get(ticket_id)
        return deepcopy(ticket) if ticket is not None else None

    def get_by_ticket_code(self, ticket_code: str) -> TicketEntity | None:
        for ticket in self._tickets.values():
            if ticket.ticket_id == ticket_code:
                return deepcopy(ticket)
        return None

    def insert(self, ticket: TicketEntity) -> TicketEntity:
        if ticket.id in self._tickets:
            raise ValueError(f"Ticket '{ticket.id}' already exists")
        if self.get_by_ticket_code(ticket.ticket_id) is not None:
            raise DuplicateTicketCodeError(ticket.ticket_id)
        self._tickets[ticket.id] = deepcopy(ticket)
        logger.debug("Inserted ticket %s (%s)", ticket.id, ticket.ticket_id)
        return deepcopy(ticket)

    def update(self, ticket: TicketEntity) -> TicketEntity | None:
        if ticket.id not in self._tickets:
            return None
        self._tickets[ticket.id] = deepcopy(ticket)
        return deepcopy(ticket)

    def delete(self, ticket_id: str) -> bool:
        return self._tickets.pop(ticket_id, None) is not None

    def count(self) -> int:
        return len(self._tickets)
