from typing import Annotated

from pydantic import Field

from ticketify.models import CamelCaseModel
from ticketify.models.entities import Priority, TicketStatus
from ticketify.models.schemas.ticket import StringList, TicketRead


class TicketFilters(CamelCaseModel):
    """Client-side filter criteria; empty fields impose no constraint."""

    status: Annotated[list[TicketStatus], Field(default_factory=list)]
    priority: Annotated[list[Priority], Field(default_factory=list)]
    category: StringList
    csam_name: StringList
    customer_name: str | None = None
    assigned_to: str | None = None
    tags: StringList
    search: str | None = None


class TicketWithMetadata(TicketRead):
    is_overdue: bool
    days_until_deadline: int
    completion_percentage: int
    completed_subtasks_count: int
    total_subtasks_count: int


class TicketStats(CamelCaseModel):
    total: int
    by_status: dict[TicketStatus, int]
    by_priority: dict[Priority, int]
    overdue: int
    completed: int
    average_completion_time: float | None = None
