import os
from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime

import pytest
from psycopg import connect
from ticketify.models.entities import SubtaskEntity, TicketEntity
from ticketify.repositories import (
    DuplicateTicketCodeError,
    InMemoryTicketRepository,
    PostgresTicketRepository,
    sample_tickets,
)

from tests.helpers.db_env import isolated_database


def _ticket(ticket_id: str = "t-1", code: str = "TCK-001") -> TicketEntity:
    now = datetime(2026, 2, 14, 21, 30, tzinfo=UTC)
    return TicketEntity(
        id=ticket_id,
        ticket_id=code,
        title="Baseline storage",
        description="create baseline storage layer",
        priority="HIGH",
        status="SCHEDULED",
        category="Feature",
        deadline=now,
        created_at=now,
        updated_at=now,
        notes=["first note"],
        subtasks=[SubtaskEntity(id="s-1", text="write migration", completed=True, completed_at=now)],
        tags=["db"],
    )


def test_memory_repository_crud() -> None:
    repository = InMemoryTicketRepository()

    created = repository.insert(_ticket())
    assert repository.get_by_id("t-1") == created
    assert repository.get_by_ticket_code("TCK-001") == created

    updated = repository.update(replace(created, status="COMPLETED"))
    assert updated is not None
    assert repository.get_by_id("t-1").status == "COMPLETED"  # type: ignore[union-attr]
    assert repository.update(_ticket(ticket_id="missing")) is None

    assert repository.delete("t-1") is True
    assert repository.delete("t-1") is False
    assert repository.count() == 0


def test_memory_repository_rejects_duplicate_code() -> None:
    repository = InMemoryTicketRepository(seed=[_ticket()])

    with pytest.raises(DuplicateTicketCodeError):
        repository.insert(_ticket(ticket_id="t-2"))


def test_memory_repository_returns_copies() -> None:
    repository = InMemoryTicketRepository(seed=[_ticket()])

    loaded = repository.get_by_id("t-1")
    assert loaded is not None
    loaded.tags.append("mutated")

    assert repository.get_by_id("t-1").tags == ["db"]  # type: ignore[union-attr]


def test_memory_repository_seed_keeps_order() -> None:
    repository = InMemoryTicketRepository(seed=sample_tickets())

    assert [ticket.ticket_id for ticket in repository.list()] == [
        "TCK-001",
        "TCK-002",
        "TCK-003",
        "TCK-004",
        "TCK-005",
    ]


@pytest.fixture(scope="module")
def repository_database_url() -> Iterator[str]:
    base_url = os.getenv("TEST_DATABASE_URL")
    if not base_url:
        pytest.skip("Set TEST_DATABASE_URL to run repository tests.")

    with isolated_database(base_url, schema_prefix="ticketify_repo_test") as scoped_url:
        yield scoped_url


@pytest.fixture
def postgres_repository(repository_database_url: str) -> PostgresTicketRepository:
    with connect(repository_database_url, autocommit=True) as connection:
        with connection.cursor() as cursor:
            cursor.execute("TRUNCATE TABLE tickets")
    return PostgresTicketRepository(database_url=repository_database_url)


def test_postgres_repository_crud(postgres_repository: PostgresTicketRepository) -> None:
    created = postgres_repository.insert(_ticket())
    assert created.ticket_id == "TCK-001"
    assert created.subtasks[0].completed_at is not None
    assert created.notes == ["first note"]

    loaded = postgres_repository.get_by_id("t-1")
    assert loaded is not None
    assert loaded.tags == ["db"]
    assert postgres_repository.get_by_ticket_code("TCK-001") is not None

    updated = postgres_repository.update(replace(loaded, status="COMPLETED", assigned_to="user-1"))
    assert updated is not None
    assert updated.status == "COMPLETED"
    assert updated.assigned_to == "user-1"

    postgres_repository.insert(_ticket(ticket_id="t-2", code="TCK-002"))
    assert [ticket.id for ticket in postgres_repository.list()] == ["t-1", "t-2"]
    assert postgres_repository.count() == 2

    assert postgres_repository.delete("t-1") is True
    assert postgres_repository.get_by_id("t-1") is None


def test_postgres_repository_duplicate_code(postgres_repository: PostgresTicketRepository) -> None:
    postgres_repository.insert(_ticket())

    with pytest.raises(DuplicateTicketCodeError):
        postgres_repository.insert(_ticket(ticket_id="t-2"))
