from ticketify.core.config import Settings
from ticketify.core.database import ping_database
from ticketify.models.schemas.health import HealthResponse, StorageHealth
from ticketify.repositories.base import TicketRepository


class HealthService:
    def __init__(self, repository: TicketRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    def get_health(self) -> HealthResponse:
        storage = self._check_storage()
        status = "ok" if storage.connected else "degraded"
        return HealthResponse(
            status=status,
            environment=self.settings.app_env,
            storage=storage,
        )

    def _check_storage(self) -> StorageHealth:
        if self.settings.storage_backend == "postgres":
            connected, error_message = ping_database(self.settings.database_url)
            if not connected:
                return StorageHealth(backend="postgres", connected=False, message=error_message)
            return StorageHealth(
                backend="postgres",
                connected=True,
                ticket_count=self.repository.count(),
            )
        return StorageHealth(
            backend="memory",
            connected=True,
            ticket_count=self.repository.count(),
        )
