from __future__ import annotations

import logging

from ticketify.core.config import get_settings
from ticketify.core.logger import configure_logging
from ticketify.repositories import DuplicateTicketCodeError, PostgresTicketRepository, sample_tickets

logger = logging.getLogger("ticketify.scripts.seed_db")


def resolve_database_url() -> str:
    database_url = get_settings().database_url
    if not database_url:
        raise RuntimeError(
            "DATABASE_URL is not set. Set env var DATABASE_URL or add DATABASE_URL to .env."
        )
    return database_url


def execute_seed(repository: PostgresTicketRepository) -> tuple[int, int]:
    inserted = 0
    skipped = 0
    for ticket in sample_tickets():
        if repository.get_by_ticket_code(ticket.ticket_id) is not None:
            skipped += 1
            continue
        try:
            repository.insert(ticket)
        except DuplicateTicketCodeError:
            skipped += 1
            continue
        inserted += 1
    return inserted, skipped


def main() -> None:
    configure_logging(get_settings().log_level)
    repository = PostgresTicketRepository(database_url=resolve_database_url())
    inserted, skipped = execute_seed(repository)
    logger.info("Seed completed: %d inserted, %d already present.", inserted, skipped)


if __name__ == "__main__":
    main()
