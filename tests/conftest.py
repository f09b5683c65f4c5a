from collections.abc import Iterator
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from ticketify.api.deps import get_ticket_repository
from ticketify.main import app
from ticketify.repositories import InMemoryTicketRepository, sample_tickets

load_dotenv(Path(__file__).resolve().parents[1] / ".env")


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def repository() -> Iterator[InMemoryTicketRepository]:
    repository = InMemoryTicketRepository(seed=sample_tickets())
    app.dependency_overrides[get_ticket_repository] = lambda: repository
    yield repository
    app.dependency_overrides.clear()
