from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticketify.api.router import api_router
from ticketify.core.config import get_settings
from ticketify.core.errors import register_exception_handlers
from ticketify.core.logger import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.app_debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def root() -> dict[str, object]:
    return {"success": True, "message": "Ticketify backend is running", "environment": settings.app_env}
