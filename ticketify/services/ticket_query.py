"""Read-only projections over an in-memory ticket collection."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from ticketify.models.entities import TICKET_STATUSES, Priority, TicketStatus
from ticketify.models.schemas.ticket import TicketRead, as_utc
from ticketify.models.schemas.ticket_view import TicketFilters

FilterInput = TicketFilters | Mapping[str, Any] | None


def coerce_filters(filters: FilterInput) -> TicketFilters | None:
    if filters is None or isinstance(filters, TicketFilters):
        return filters
    return TicketFilters.model_validate(dict(filters))


def searchable_text(ticket: TicketRead) -> str:
    return " ".join(
        [
            ticket.title,
            ticket.description,
            ticket.ticket_id,
            ticket.customer_name,
            ticket.csam_name,
        ]
    ).lower()


def matches_filters(ticket: TicketRead, filters: TicketFilters) -> bool:
    if filters.status and ticket.status not in filters.status:
        return False
    if filters.priority and ticket.priority not in filters.priority:
        return False
    if filters.category and ticket.category not in filters.category:
        return False
    if filters.csam_name and ticket.csam_name not in filters.csam_name:
        return False
    if filters.customer_name:
        if filters.customer_name.lower() not in ticket.customer_name.lower():
            return False
    if filters.assigned_to and ticket.assigned_to != filters.assigned_to:
        return False
    if filters.tags and not any(tag in ticket.tags for tag in filters.tags):
        return False
    if filters.search and filters.search.lower() not in searchable_text(ticket):
        return False
    return True


def filter_tickets(tickets: Sequence[TicketRead], filters: FilterInput = None) -> list[TicketRead]:
    """Return the tickets matching every provided criterion, in source order.

    The result is always a new list, so callers can mutate it without
    touching the source collection.
    """
    criteria = coerce_filters(filters)
    if criteria is None:
        return list(tickets)
    return [ticket for ticket in tickets if matches_filters(ticket, criteria)]


def tickets_by_status(tickets: Sequence[TicketRead], status: TicketStatus) -> list[TicketRead]:
    return filter_tickets(tickets, TicketFilters(status=[status]))


def tickets_by_priority(tickets: Sequence[TicketRead], priority: Priority) -> list[TicketRead]:
    return filter_tickets(tickets, TicketFilters(priority=[priority]))


def resolve_now(now: datetime | None = None) -> datetime:
    """Reference time for deadline checks; naive values are taken as UTC."""
    return datetime.now(UTC) if now is None else as_utc(now)


def is_past_deadline(ticket: TicketRead, now: datetime | None = None) -> bool:
    current = resolve_now(now)
    return current > ticket.deadline and ticket.status != "COMPLETED"


def overdue_tickets(
    tickets: Sequence[TicketRead],
    now: datetime | None = None,
) -> list[TicketRead]:
    # Tickets flagged OVERDUE whose deadline has actually passed.
    return [
        ticket
        for ticket in tickets_by_status(tickets, "OVERDUE")
        if is_past_deadline(ticket, now)
    ]


def group_by_status(tickets: Iterable[TicketRead]) -> dict[TicketStatus, list[TicketRead]]:
    columns: dict[TicketStatus, list[TicketRead]] = {status: [] for status in TICKET_STATUSES}
    for ticket in tickets:
        columns[ticket.status].append(ticket)
    return columns
