from typing import Annotated

from fastapi import APIRouter, Depends

from ticketify.api.deps import get_ticket_repository
from ticketify.core.config import Settings, get_settings
from ticketify.models.schemas.health import HealthResponse
from ticketify.repositories import TicketRepository
from ticketify.services.health_service import HealthService

router = APIRouter()


def get_health_service(
    settings: Annotated[Settings, Depends(get_settings)],
    repository: Annotated[TicketRepository, Depends(get_ticket_repository)],
) -> HealthService:
    return HealthService(repository=repository, settings=settings)


@router.get("/health", response_model=HealthResponse)
def health(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> HealthResponse:
    return health_service.get_health()
