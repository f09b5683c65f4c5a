from fastapi import status
from fastapi.testclient import TestClient
from ticketify.api.routes.tickets import get_ticket_service
from ticketify.core.errors import AppError
from ticketify.main import app
from ticketify.repositories import InMemoryTicketRepository


class _ExplodingTicketService:
    def list_tickets(self) -> list[object]:
        raise AppError(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="STORAGE_UNAVAILABLE",
            message="Storage is offline",
        )


def test_ticket_api_routes(client: TestClient, repository: InMemoryTicketRepository) -> None:
    list_response = client.get("/api/tickets")
    assert list_response.status_code == status.HTTP_200_OK
    listing = list_response.json()
    assert listing["success"] is True
    assert listing["error"] is None
    assert [item["ticketId"] for item in listing["data"]] == [
        "TCK-001",
        "TCK-002",
        "TCK-003",
        "TCK-004",
        "TCK-005",
    ]

    create_response = client.post(
        "/api/tickets",
        json={"ticketId": "TCK-100", "title": "API ticket", "tags": ["api"]},
    )
    assert create_response.status_code == status.HTTP_201_CREATED
    created = create_response.json()["data"]
    assert created["ticketId"] == "TCK-100"
    assert created["priority"] == "MEDIUM"
    assert created["status"] == "SCHEDULED"
    assert created["completedAt"] is None
    ticket_id = created["id"]

    get_response = client.get(f"/api/tickets/{ticket_id}")
    assert get_response.status_code == status.HTTP_200_OK
    assert get_response.json()["data"]["title"] == "API ticket"

    update_response = client.put(
        f"/api/tickets/{ticket_id}",
        json={"id": ticket_id, "createdAt": "2000-01-01T00:00:00Z", "status": "COMPLETED"},
    )
    assert update_response.status_code == status.HTTP_200_OK
    updated = update_response.json()["data"]
    assert updated["status"] == "COMPLETED"
    assert updated["completedAt"] is not None
    assert updated["createdAt"] == created["createdAt"]

    unassign_response = client.put(f"/api/tickets/{ticket_id}", json={"assignedTo": None})
    assert unassign_response.status_code == status.HTTP_200_OK
    assert unassign_response.json()["data"]["assignedTo"] is None

    delete_response = client.delete(f"/api/tickets/{ticket_id}")
    assert delete_response.status_code == status.HTTP_200_OK
    assert delete_response.json()["data"] == {"message": "Ticket deleted successfully"}
    assert repository.get_by_id(ticket_id) is None


def test_ticket_api_not_found_envelope(
    client: TestClient,
    repository: InMemoryTicketRepository,
) -> None:
    for response in (
        client.get("/api/tickets/missing"),
        client.put("/api/tickets/missing", json={"title": "x"}),
        client.delete("/api/tickets/missing"),
    ):
        assert response.status_code == status.HTTP_404_NOT_FOUND
        payload = response.json()
        assert payload["success"] is False
        assert payload["data"] is None
        assert payload["error"] == "Ticket not found"
        assert payload["code"] == "TICKET_NOT_FOUND"


def test_ticket_api_duplicate_code(client: TestClient, repository: InMemoryTicketRepository) -> None:
    response = client.post("/api/tickets", json={"ticketId": "TCK-001", "title": "Duplicate"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "Ticket ID already exists"


def test_ticket_api_rejects_malformed_payloads(
    client: TestClient,
    repository: InMemoryTicketRepository,
) -> None:
    missing_title = client.post("/api/tickets", json={"ticketId": "TCK-200"})
    assert missing_title.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
    assert missing_title.json()["success"] is False
    assert "title" in missing_title.json()["error"]

    bad_priority = client.post(
        "/api/tickets",
        json={"ticketId": "TCK-201", "title": "Bad", "priority": "CRITICAL"},
    )
    assert bad_priority.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
    assert bad_priority.json()["code"] == "VALIDATION_ERROR"

    unknown_field = client.post(
        "/api/tickets",
        json={"ticketId": "TCK-202", "title": "Bad", "color": "red"},
    )
    assert unknown_field.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    null_status = client.put("/api/tickets/1", json={"status": None})
    assert null_status.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    blank_title = client.post("/api/tickets", json={"ticketId": "TCK-203", "title": " "})
    assert blank_title.status_code == status.HTTP_400_BAD_REQUEST
    assert blank_title.json()["error"] == "Ticket title is required"

    assert repository.count() == 5


def test_ticket_api_error_structure_from_service(client: TestClient) -> None:
    app.dependency_overrides[get_ticket_service] = _ExplodingTicketService

    response = client.get("/api/tickets")
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    payload = response.json()
    assert payload == {
        "success": False,
        "data": None,
        "error": "Storage is offline",
        "code": "STORAGE_UNAVAILABLE",
        "details": {},
    }

    app.dependency_overrides.clear()
