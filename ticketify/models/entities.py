from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, get_args

Priority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]
TicketStatus = Literal["SCHEDULED", "IN_PROGRESS", "ACTIVE", "OVERDUE", "COMPLETED"]
CustomerType = Literal["ENTERPRISE", "SMB", "STARTUP"]

PRIORITIES: tuple[Priority, ...] = get_args(Priority)
TICKET_STATUSES: tuple[TicketStatus, ...] = get_args(TicketStatus)
CUSTOMER_TYPES: tuple[CustomerType, ...] = get_args(CustomerType)


@dataclass(slots=True)
class SubtaskEntity:
    id: str
    text: str
    completed: bool = False
    completed_at: datetime | None = None


@dataclass(slots=True)
class TicketEntity:
    id: str
    ticket_id: str
    title: str
    description: str
    priority: Priority
    status: TicketStatus
    category: str
    deadline: datetime
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None
    csam_name: str = ""
    tpid: str = ""
    agreement_id: str = ""
    customer_name: str = ""
    customer_type: CustomerType = "SMB"
    notes: list[str] = field(default_factory=list)
    subtasks: list[SubtaskEntity] = field(default_factory=list)
    assigned_to: str | None = None
    tags: list[str] = field(default_factory=list)
