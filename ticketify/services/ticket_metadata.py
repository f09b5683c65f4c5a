import math
from collections.abc import Sequence
from datetime import datetime

from ticketify.models.entities import PRIORITIES, TICKET_STATUSES
from ticketify.models.schemas.ticket import TicketRead
from ticketify.models.schemas.ticket_view import TicketStats, TicketWithMetadata
from ticketify.services.ticket_query import is_past_deadline, resolve_now

SECONDS_PER_DAY = 86_400


def days_until(deadline: datetime, now: datetime) -> int:
    return math.floor((deadline - now).total_seconds() / SECONDS_PER_DAY)


def completion_percentage(completed: int, total: int) -> int:
    if total == 0:
        return 0
    return round(completed / total * 100)


def derive_metadata(ticket: TicketRead, now: datetime | None = None) -> TicketWithMetadata:
    """Attach presentation-only fields to a ticket without modifying it."""
    current = resolve_now(now)
    total = len(ticket.subtasks)
    completed = sum(1 for subtask in ticket.subtasks if subtask.completed)
    return TicketWithMetadata.model_validate(
        {
            **ticket.model_dump(),
            "is_overdue": is_past_deadline(ticket, current),
            "days_until_deadline": days_until(ticket.deadline, current),
            "completion_percentage": completion_percentage(completed, total),
            "completed_subtasks_count": completed,
            "total_subtasks_count": total,
        }
    )


def compute_stats(tickets: Sequence[TicketRead], now: datetime | None = None) -> TicketStats:
    current = resolve_now(now)
    by_status = {status: 0 for status in TICKET_STATUSES}
    by_priority = {priority: 0 for priority in PRIORITIES}
    completion_hours: list[float] = []
    overdue = 0

    for ticket in tickets:
        by_status[ticket.status] += 1
        by_priority[ticket.priority] += 1
        if is_past_deadline(ticket, current):
            overdue += 1
        if ticket.status == "COMPLETED" and ticket.completed_at is not None:
            elapsed = ticket.completed_at - ticket.created_at
            completion_hours.append(elapsed.total_seconds() / 3600)

    average = None
    if completion_hours:
        average = round(sum(completion_hours) / len(completion_hours), 2)

    return TicketStats(
        total=len(tickets),
        by_status=by_status,
        by_priority=by_priority,
        overdue=overdue,
        completed=by_status["COMPLETED"],
        average_completion_time=average,
    )
