from datetime import timedelta

from ticketify.services.ticket_metadata import compute_stats, derive_metadata

from tests.helpers.factories import BASE_TIME, make_ticket


def _subtasks(done: int, total: int) -> list[dict[str, object]]:
    return [
        {
            "id": f"s-{index}",
            "text": f"step {index}",
            "completed": index < done,
            "completedAt": BASE_TIME if index < done else None,
        }
        for index in range(total)
    ]


def test_completion_percentage_from_subtasks() -> None:
    ticket = make_ticket(subtasks=_subtasks(2, 4))

    metadata = derive_metadata(ticket, now=BASE_TIME)

    assert metadata.completion_percentage == 50
    assert metadata.completed_subtasks_count == 2
    assert metadata.total_subtasks_count == 4


def test_completion_percentage_without_subtasks_is_zero() -> None:
    metadata = derive_metadata(make_ticket(), now=BASE_TIME)

    assert metadata.completion_percentage == 0
    assert metadata.total_subtasks_count == 0


def test_past_deadline_is_overdue_with_negative_days() -> None:
    ticket = make_ticket(status="ACTIVE", deadline=BASE_TIME - timedelta(days=3, hours=2))

    metadata = derive_metadata(ticket, now=BASE_TIME)

    assert metadata.is_overdue is True
    assert metadata.days_until_deadline < 0
    assert metadata.days_until_deadline == -4


def test_completed_ticket_is_never_overdue() -> None:
    ticket = make_ticket(status="COMPLETED", deadline=BASE_TIME - timedelta(days=1))

    assert derive_metadata(ticket, now=BASE_TIME).is_overdue is False


def test_future_deadline_counts_whole_days() -> None:
    ticket = make_ticket(deadline=BASE_TIME + timedelta(days=5, hours=6))

    metadata = derive_metadata(ticket, now=BASE_TIME)

    assert metadata.is_overdue is False
    assert metadata.days_until_deadline == 5


def test_naive_now_is_treated_as_utc() -> None:
    ticket = make_ticket(status="ACTIVE", deadline=BASE_TIME + timedelta(days=2))
    naive_now = BASE_TIME.replace(tzinfo=None)

    metadata = derive_metadata(ticket, now=naive_now)

    assert metadata.is_overdue is False
    assert metadata.days_until_deadline == 2
    assert compute_stats([ticket], now=naive_now + timedelta(days=3)).overdue == 1


def test_derivation_does_not_mutate_ticket() -> None:
    ticket = make_ticket(subtasks=_subtasks(1, 3))
    snapshot = ticket.model_dump()

    first = derive_metadata(ticket, now=BASE_TIME)
    second = derive_metadata(ticket, now=BASE_TIME)

    assert ticket.model_dump() == snapshot
    assert first == second
    assert first.completion_percentage == 33


def test_compute_stats() -> None:
    tickets = [
        make_ticket(1, status="ACTIVE", priority="HIGH", deadline=BASE_TIME - timedelta(days=1)),
        make_ticket(
            2,
            status="COMPLETED",
            created_at=BASE_TIME - timedelta(hours=10),
            completed_at=BASE_TIME,
        ),
        make_ticket(
            3,
            status="COMPLETED",
            created_at=BASE_TIME - timedelta(hours=20),
            completed_at=BASE_TIME,
        ),
    ]

    stats = compute_stats(tickets, now=BASE_TIME)

    assert stats.total == 3
    assert stats.completed == 2
    assert stats.overdue == 1
    assert stats.by_status["COMPLETED"] == 2
    assert stats.by_status["OVERDUE"] == 0
    assert stats.by_priority == {"LOW": 0, "MEDIUM": 2, "HIGH": 1, "URGENT": 0}
    assert stats.average_completion_time == 15.0


def test_compute_stats_without_completed_tickets() -> None:
    stats = compute_stats([], now=BASE_TIME)

    assert stats.total == 0
    assert stats.average_completion_time is None
