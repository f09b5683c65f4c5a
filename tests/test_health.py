from datetime import UTC, datetime

from fastapi.testclient import TestClient
from ticketify.api.routes.health import get_health_service
from ticketify.main import app
from ticketify.models.schemas.health import HealthResponse, StorageHealth
from ticketify.repositories import InMemoryTicketRepository


class _DegradedService:
    def get_health(self) -> HealthResponse:
        return HealthResponse(
            status="degraded",
            environment="test",
            storage=StorageHealth(
                backend="postgres",
                connected=False,
                message="connection timeout",
            ),
            timestamp=datetime.now(UTC),
        )


def test_health_ok_with_memory_storage(
    client: TestClient,
    repository: InMemoryTicketRepository,
) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["storage"]["backend"] == "memory"
    assert payload["storage"]["connected"] is True
    assert payload["storage"]["ticket_count"] == repository.count()


def test_health_degraded(client: TestClient) -> None:
    app.dependency_overrides[get_health_service] = _DegradedService
    response = client.get("/api/health")
    app.dependency_overrides.clear()

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["storage"]["connected"] is False
    assert payload["storage"]["message"] == "connection timeout"


def test_root_banner(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["success"] is True
