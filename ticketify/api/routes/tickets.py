from typing import Annotated

from fastapi import APIRouter, Depends, status

from ticketify.api.deps import get_ticket_repository
from ticketify.core.config import Settings, get_settings
from ticketify.models.schemas.ticket import (
    TicketCreateRequest,
    TicketDataResponse,
    TicketDeleteResponse,
    TicketListResponse,
    TicketUpdateRequest,
)
from ticketify.repositories import TicketRepository
from ticketify.services.ticket_service import TicketService

router = APIRouter(prefix="/tickets")


def get_ticket_service(
    settings: Annotated[Settings, Depends(get_settings)],
    repository: Annotated[TicketRepository, Depends(get_ticket_repository)],
) -> TicketService:
    return TicketService(
        ticket_repository=repository,
        clear_completed_at_on_reopen=settings.clear_completed_at_on_reopen,
    )


@router.get("", response_model=TicketListResponse)
def list_tickets(
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketListResponse:
    return TicketListResponse(data=ticket_service.list_tickets())


@router.post("", response_model=TicketDataResponse, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: TicketCreateRequest,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketDataResponse:
    ticket = ticket_service.create_ticket(payload)
    return TicketDataResponse(data=ticket)


@router.get("/{ticket_id}", response_model=TicketDataResponse)
def get_ticket(
    ticket_id: str,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketDataResponse:
    ticket = ticket_service.get_ticket(ticket_id)
    return TicketDataResponse(data=ticket)


@router.put("/{ticket_id}", response_model=TicketDataResponse)
def update_ticket(
    ticket_id: str,
    payload: TicketUpdateRequest,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketDataResponse:
    ticket = ticket_service.update_ticket(ticket_id, payload)
    return TicketDataResponse(data=ticket)


@router.delete("/{ticket_id}", response_model=TicketDeleteResponse)
def delete_ticket(
    ticket_id: str,
    ticket_service: Annotated[TicketService, Depends(get_ticket_service)],
) -> TicketDeleteResponse:
    result = ticket_service.delete_ticket(ticket_id)
    return TicketDeleteResponse(data=result)
