from fastapi import APIRouter

from ticketify.api.routes.health import router as health_router
from ticketify.api.routes.tickets import router as ticket_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(ticket_router, tags=["tickets"])
