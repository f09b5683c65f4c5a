"""
Client-side ticket cache.

``TicketStore`` mirrors the remote ticket collection for one session. Every
mutation goes through the API and the server's answer is merged back into
the local list; failures are recorded on ``last_error`` instead of being
raised, so callers can render whatever the store currently holds.

Overlapping calls are not serialized: whichever response resolves last
is what ends up in the cache.
"""
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ticketify.client.api import TicketApiClient
from ticketify.client.errors import TicketClientError, ValidationError
from ticketify.models.entities import Priority, TicketStatus
from ticketify.models.schemas.ticket import TicketCreateRequest, TicketRead, TicketUpdateRequest
from ticketify.models.schemas.ticket_view import TicketStats, TicketWithMetadata
from ticketify.services.ticket_metadata import compute_stats, derive_metadata
from ticketify.services.ticket_query import (
    FilterInput,
    filter_tickets,
    group_by_status,
    overdue_tickets,
)

logger = logging.getLogger(__name__)

CreateInput = TicketCreateRequest | Mapping[str, Any]
UpdateInput = TicketUpdateRequest | Mapping[str, Any]

IMMUTABLE_UPDATE_KEYS = ("id", "createdAt", "created_at")


def _first_issue(exc: PydanticValidationError) -> str:
    issue = exc.errors()[0]
    location = ".".join(str(part) for part in issue["loc"])
    return f"{location}: {issue['msg']}" if location else issue["msg"]


def _text_field(data: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            return value
    return ""


class TicketStore:
    def __init__(self, api: TicketApiClient | None = None) -> None:
        self.api = api or TicketApiClient()
        self.tickets: list[TicketRead] = []
        self.loading = False
        self.last_error: str | None = None

    async def __aenter__(self) -> "TicketStore":
        await self.activate()
        return self

    async def __aexit__(self, *_: object) -> None:
        return None

    async def activate(self) -> None:
        """Initial load, run once when the consuming view comes up."""
        await self.refresh()

    def _record_error(self, action: str, exc: TicketClientError) -> None:
        self.last_error = exc.message
        if isinstance(exc, ValidationError):
            logger.info("Rejected %s: %s", action, exc.message)
        else:
            logger.warning("Failed to %s: %s", action, exc.message)

    def _replace_local(self, ticket: TicketRead) -> bool:
        replaced = False
        merged: list[TicketRead] = []
        for existing in self.tickets:
            if existing.id == ticket.id:
                merged.append(ticket)
                replaced = True
            else:
                merged.append(existing)
        self.tickets = merged
        return replaced

    # Synchronization

    async def refresh(self) -> None:
        self.loading = True
        try:
            tickets = await self.api.list_tickets()
        except TicketClientError as exc:
            self._record_error("fetch tickets", exc)
        else:
            self.tickets = tickets
            self.last_error = None
        finally:
            self.loading = False

    async def fetch_one(self, ticket_id: str) -> TicketRead | None:
        self.last_error = None
        try:
            if not ticket_id:
                raise ValidationError("Ticket ID is required")
            ticket = await self.api.get_ticket(ticket_id)
        except TicketClientError as exc:
            self._record_error(f"fetch ticket {ticket_id}", exc)
            return None
        if not self._replace_local(ticket):
            self.tickets = [*self.tickets, ticket]
        return ticket

    async def create(self, data: CreateInput) -> TicketRead | None:
        self.last_error = None
        try:
            payload = self._build_create_request(data)
            created = await self.api.create_ticket(payload)
        except TicketClientError as exc:
            self._record_error("create ticket", exc)
            return None
        self.tickets = [*self.tickets, created]
        logger.debug("Created ticket %s (%s)", created.id, created.ticket_id)
        return created

    async def update(self, data: UpdateInput) -> TicketRead | None:
        self.last_error = None
        try:
            ticket_id, payload = self._build_update_request(data)
            updated = await self.api.update_ticket(ticket_id, payload)
        except TicketClientError as exc:
            self._record_error("update ticket", exc)
            return None
        self._replace_local(updated)
        return updated

    async def remove(self, ticket_id: str) -> bool:
        self.last_error = None
        try:
            if not ticket_id:
                raise ValidationError("Ticket ID is required for delete")
            if self.get(ticket_id) is None:
                raise ValidationError(f"Ticket {ticket_id} is not loaded")
            await self.api.delete_ticket(ticket_id)
        except TicketClientError as exc:
            self._record_error(f"delete ticket {ticket_id}", exc)
            return False
        self.tickets = [ticket for ticket in self.tickets if ticket.id != ticket_id]
        return True

    # Convenience mutations

    async def set_status(self, ticket_id: str, status: TicketStatus) -> TicketRead | None:
        changes: dict[str, Any] = {"id": ticket_id, "status": status}
        hint_fields: dict[str, Any] = {"status": status}
        if status == "COMPLETED":
            hint = datetime.now(UTC)
            changes["completedAt"] = hint
            hint_fields["completed_at"] = hint

        previous = self.get(ticket_id)
        hinted: TicketRead | None = None
        if previous is not None:
            hinted = previous.model_copy(update=hint_fields)
            self._replace_local(hinted)

        updated = await self.update(changes)
        # Roll back only while the hint is still the cached entry.
        if updated is None and hinted is not None and self.get(ticket_id) is hinted:
            self._replace_local(previous)
        return updated

    async def set_priority(self, ticket_id: str, priority: Priority) -> TicketRead | None:
        return await self.update({"id": ticket_id, "priority": priority})

    async def assign(self, ticket_id: str, user_id: str) -> TicketRead | None:
        return await self.update({"id": ticket_id, "assignedTo": user_id})

    async def unassign(self, ticket_id: str) -> TicketRead | None:
        return await self.update({"id": ticket_id, "assignedTo": None})

    # Read views

    def get(self, ticket_id: str) -> TicketRead | None:
        return next((ticket for ticket in self.tickets if ticket.id == ticket_id), None)

    def filter(self, filters: FilterInput = None) -> list[TicketRead]:
        return filter_tickets(self.tickets, filters)

    def with_metadata(self, now: datetime | None = None) -> list[TicketWithMetadata]:
        return [derive_metadata(ticket, now) for ticket in self.tickets]

    def by_status(self) -> dict[TicketStatus, list[TicketRead]]:
        return group_by_status(self.tickets)

    def overdue(self, now: datetime | None = None) -> list[TicketRead]:
        return overdue_tickets(self.tickets, now)

    def stats(self, now: datetime | None = None) -> TicketStats:
        return compute_stats(self.tickets, now)

    # Payload construction

    def _build_create_request(self, data: CreateInput) -> TicketCreateRequest:
        if isinstance(data, TicketCreateRequest):
            title, ticket_code = data.title, data.ticket_id
        else:
            title = _text_field(data, "title")
            ticket_code = _text_field(data, "ticketId", "ticket_id")

        if not title.strip():
            raise ValidationError("Ticket title is required")
        if not ticket_code.strip():
            raise ValidationError("Ticket ID is required")

        if isinstance(data, TicketCreateRequest):
            return data
        try:
            return TicketCreateRequest.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid ticket: {_first_issue(exc)}") from exc

    def _build_update_request(self, data: UpdateInput) -> tuple[str, TicketUpdateRequest]:
        if isinstance(data, TicketUpdateRequest):
            ticket_id = data.id or ""
            fields = data.model_dump(exclude_unset=True, exclude={"id", "created_at"})
        else:
            ticket_id = str(data.get("id") or "")
            fields = {key: value for key, value in data.items() if key not in IMMUTABLE_UPDATE_KEYS}

        if not ticket_id:
            raise ValidationError("Ticket ID is required for update")
        try:
            return ticket_id, TicketUpdateRequest.model_validate(fields)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid ticket update: {_first_issue(exc)}") from exc
