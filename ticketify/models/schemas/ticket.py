from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, ConfigDict, Field, model_validator

from ticketify.models import CamelCaseModel
from ticketify.models.entities import CustomerType, Priority, TicketStatus


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]
StringList = Annotated[list[str], Field(default_factory=list)]

# Fields a caller may echo back on update; the server owns their values.
SERVER_MANAGED_FIELDS = frozenset({"id", "ticket_id", "created_at", "updated_at", "completed_at"})
NULLABLE_UPDATE_FIELDS = frozenset({"assigned_to", "completed_at"})


class SubtaskRead(CamelCaseModel):
    id: str
    text: str
    completed: bool = False
    completed_at: UtcDatetime | None = None


class SubtaskWrite(CamelCaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    text: str
    completed: bool = False
    completed_at: UtcDatetime | None = None


class TicketRead(CamelCaseModel):
    id: str
    ticket_id: str
    title: str
    description: str = ""
    priority: Priority
    status: TicketStatus
    category: str = "General"
    deadline: UtcDatetime
    completed_at: UtcDatetime | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    csam_name: str = ""
    tpid: str = ""
    agreement_id: str = ""
    customer_name: str = ""
    customer_type: CustomerType = "SMB"
    notes: StringList
    subtasks: Annotated[list[SubtaskRead], Field(default_factory=list)]
    assigned_to: str | None = None
    tags: StringList


class TicketCreateRequest(CamelCaseModel):
    model_config = ConfigDict(extra="forbid")

    ticket_id: str
    title: str
    description: str = ""
    priority: Priority = "MEDIUM"
    status: TicketStatus = "SCHEDULED"
    category: str = "General"
    deadline: UtcDatetime | None = None
    csam_name: str = ""
    tpid: str = ""
    agreement_id: str = ""
    customer_name: str = ""
    customer_type: CustomerType = "SMB"
    notes: StringList
    subtasks: Annotated[list[SubtaskWrite], Field(default_factory=list)]
    assigned_to: str | None = None
    tags: StringList


class TicketUpdateRequest(CamelCaseModel):
    """Partial ticket update; only fields present in the payload are applied."""

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    ticket_id: str | None = None
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None
    completed_at: UtcDatetime | None = None

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    status: TicketStatus | None = None
    category: str | None = None
    deadline: UtcDatetime | None = None
    csam_name: str | None = None
    tpid: str | None = None
    agreement_id: str | None = None
    customer_name: str | None = None
    customer_type: CustomerType | None = None
    notes: list[str] | None = None
    subtasks: list[SubtaskWrite] | None = None
    assigned_to: str | None = None
    tags: list[str] | None = None

    @model_validator(mode="after")
    def _reject_null_values(self) -> "TicketUpdateRequest":
        for name in self.model_fields_set:
            if name in NULLABLE_UPDATE_FIELDS or name in SERVER_MANAGED_FIELDS:
                continue
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the caller-writable fields that were explicitly set."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name not in SERVER_MANAGED_FIELDS
        }


class TicketDataResponse(CamelCaseModel):
    success: bool = True
    data: TicketRead
    error: str | None = None


class TicketListResponse(CamelCaseModel):
    success: bool = True
    data: list[TicketRead]
    error: str | None = None


class DeleteResult(CamelCaseModel):
    message: str


class TicketDeleteResponse(CamelCaseModel):
    success: bool = True
    data: DeleteResult
    error: str | None = None
