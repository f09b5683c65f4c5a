import logging
from dataclasses import asdict, replace
from datetime import UTC, datetime
from uuid import uuid4

from fastapi import status

from ticketify.core.errors import AppError
from ticketify.models.entities import SubtaskEntity, TicketEntity
from ticketify.models.schemas.ticket import (
    DeleteResult,
    SubtaskWrite,
    TicketCreateRequest,
    TicketRead,
    TicketUpdateRequest,
)
from ticketify.repositories.base import DuplicateTicketCodeError, TicketRepository

logger = logging.getLogger(__name__)


class TicketService:
    def __init__(
        self,
        ticket_repository: TicketRepository,
        clear_completed_at_on_reopen: bool = False,
    ) -> None:
        self.ticket_repository = ticket_repository
        self.clear_completed_at_on_reopen = clear_completed_at_on_reopen

    def list_tickets(self) -> list[TicketRead]:
        return [self._to_ticket_read(ticket) for ticket in self.ticket_repository.list()]

    def get_ticket(self, ticket_id: str) -> TicketRead:
        ticket = self.ticket_repository.get_by_id(ticket_id)
        if ticket is None:
            self._raise_ticket_not_found(ticket_id)
        return self._to_ticket_read(ticket)

    def create_ticket(self, payload: TicketCreateRequest) -> TicketRead:
        title = self._validate_title(payload.title)
        ticket_code = self._validate_ticket_code(payload.ticket_id)

        if self.ticket_repository.get_by_ticket_code(ticket_code) is not None:
            self._raise_code_conflict(ticket_code)

        now = datetime.now(UTC)
        ticket = TicketEntity(
            id=uuid4().hex,
            ticket_id=ticket_code,
            title=title,
            description=payload.description,
            priority=payload.priority,
            status=payload.status,
            category=payload.category,
            deadline=payload.deadline or now,
            completed_at=now if payload.status == "COMPLETED" else None,
            created_at=now,
            updated_at=now,
            csam_name=payload.csam_name,
            tpid=payload.tpid,
            agreement_id=payload.agreement_id,
            customer_name=payload.customer_name,
            customer_type=payload.customer_type,
            notes=list(payload.notes),
            subtasks=self._normalize_subtasks(payload.subtasks, existing=[], now=now),
            assigned_to=payload.assigned_to,
            tags=self._dedupe_tags(payload.tags),
        )

        try:
            created = self.ticket_repository.insert(ticket)
        except DuplicateTicketCodeError as exc:
            self._raise_code_conflict(ticket_code, exc=exc)

        logger.info("Created ticket %s (%s)", created.id, created.ticket_id)
        return self._to_ticket_read(created)

    def update_ticket(self, ticket_id: str, payload: TicketUpdateRequest) -> TicketRead:
        current = self.ticket_repository.get_by_id(ticket_id)
        if current is None:
            self._raise_ticket_not_found(ticket_id)

        changes = payload.changes()
        if "title" in changes:
            changes["title"] = self._validate_title(changes["title"])
        if "tags" in changes:
            changes["tags"] = self._dedupe_tags(changes["tags"])

        now = datetime.now(UTC)
        if "subtasks" in changes:
            changes["subtasks"] = self._normalize_subtasks(
                changes["subtasks"],
                existing=current.subtasks,
                now=now,
            )

        next_status = changes.get("status", current.status)
        completed_at = current.completed_at
        if changes.get("status") == "COMPLETED":
            completed_at = now
        elif next_status != "COMPLETED" and self.clear_completed_at_on_reopen:
            completed_at = None

        merged = replace(
            current,
            **changes,
            completed_at=completed_at,
            updated_at=max(now, current.updated_at, current.created_at),
        )
        updated = self.ticket_repository.update(merged)
        if updated is None:
            self._raise_ticket_not_found(ticket_id)

        logger.debug("Updated ticket %s fields=%s", ticket_id, sorted(changes))
        return self._to_ticket_read(updated)

    def delete_ticket(self, ticket_id: str) -> DeleteResult:
        deleted = self.ticket_repository.delete(ticket_id)
        if not deleted:
            self._raise_ticket_not_found(ticket_id)
        logger.info("Deleted ticket %s", ticket_id)
        return DeleteResult(message="Ticket deleted successfully")

    def _to_ticket_read(self, ticket: TicketEntity) -> TicketRead:
        return TicketRead.model_validate(asdict(ticket))

    def _normalize_subtasks(
        self,
        subtasks: list[SubtaskWrite],
        *,
        existing: list[SubtaskEntity],
        now: datetime,
    ) -> list[SubtaskEntity]:
        previous = {subtask.id: subtask for subtask in existing}
        normalized: list[SubtaskEntity] = []
        for subtask in subtasks:
            subtask_id = subtask.id or uuid4().hex
            completed_at = None
            if subtask.completed:
                prior = previous.get(subtask_id)
                prior_stamp = prior.completed_at if prior is not None else None
                completed_at = subtask.completed_at or prior_stamp or now
            normalized.append(
                SubtaskEntity(
                    id=subtask_id,
                    text=subtask.text,
                    completed=subtask.completed,
                    completed_at=completed_at,
                )
            )
        return normalized

    def _dedupe_tags(self, tags: list[str]) -> list[str]:
        return list(dict.fromkeys(tag.strip() for tag in tags if tag.strip()))

    def _validate_title(self, title: str) -> str:
        normalized = title.strip()
        if not normalized:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_TITLE",
                message="Ticket title is required",
            )
        if len(normalized) > 200:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_TITLE",
                message="Ticket title length must be between 1 and 200 characters.",
            )
        return normalized

    def _validate_ticket_code(self, ticket_code: str) -> str:
        normalized = ticket_code.strip()
        if not normalized:
            raise AppError(
                status_code=status.HTTP_400_BAD_REQUEST,
                code="INVALID_TICKET_ID",
                message="Ticket ID is required",
            )
        return normalized

    def _raise_code_conflict(
        self,
        ticket_code: str,
        exc: DuplicateTicketCodeError | None = None,
    ) -> None:
        raise AppError(
            status_code=status.HTTP_409_CONFLICT,
            code="TICKET_ID_CONFLICT",
            message="Ticket ID already exists",
            details={"ticket_id": ticket_code},
        ) from exc

    def _raise_ticket_not_found(self, ticket_id: str) -> None:
        raise AppError(
            status_code=status.HTTP_404_NOT_FOUND,
            code="TICKET_NOT_FOUND",
            message="Ticket not found",
            details={"ticket_id": ticket_id},
        )
