from typing import Protocol

from ticketify.models.entities import TicketEntity


class DuplicateTicketCodeError(ValueError):
    """Raised when a ticket code is already taken by another ticket."""

    def __init__(self, ticket_code: str) -> None:
        self.ticket_code = ticket_code
        super().__init__(f"Ticket ID '{ticket_code}' already exists")


class TicketRepository(Protocol):
    backend: str

    def list(self) -> list[TicketEntity]:
        """Return every ticket in insertion order."""

    def get_by_id(self, ticket_id: str) -> TicketEntity | None:
        """Look up a ticket by its system identifier."""

    def get_by_ticket_code(self, ticket_code: str) -> TicketEntity | None:
        """Look up a ticket by its human-readable code."""

    def insert(self, ticket: TicketEntity) -> TicketEntity:
        """Store a new ticket; raises DuplicateTicketCodeError on a code clash."""

    def update(self, ticket: TicketEntity) -> TicketEntity | None:
        """Replace a stored ticket, returning None when it does not exist."""

    def delete(self, ticket_id: str) -> bool:
        """Remove a ticket, returning whether anything was deleted."""

    def count(self) -> int:
        """Return the number of stored tickets."""
