from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from psycopg import Connection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from ticketify.core.database import get_connection
from ticketify.models.entities import SubtaskEntity, TicketEntity
from ticketify.repositories.base import DuplicateTicketCodeError

TICKET_COLUMNS = """
    id, ticket_code, title, description, priority, status, category, deadline,
    completed_at, created_at, updated_at, csam_name, tpid, agreement_id,
    customer_name, customer_type, notes, subtasks, assigned_to, tags
"""


def _subtasks_to_json(subtasks: list[SubtaskEntity]) -> list[dict[str, Any]]:
    return [
        {
            "id": subtask.id,
            "text": subtask.text,
            "completed": subtask.completed,
            "completedAt": subtask.completed_at.isoformat() if subtask.completed_at else None,
        }
        for subtask in subtasks
    ]


def _subtasks_from_json(raw: list[dict[str, Any]] | None) -> list[SubtaskEntity]:
    subtasks: list[SubtaskEntity] = []
    for item in raw or []:
        completed_at = item.get("completedAt")
        subtasks.append(
            SubtaskEntity(
                id=item["id"],
                text=item["text"],
                completed=bool(item.get("completed", False)),
                completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            )
        )
    return subtasks


def _to_ticket_entity(row: dict[str, Any]) -> TicketEntity:
    return TicketEntity(
        id=row["id"],
        ticket_id=row["ticket_code"],
        title=row["title"],
        description=row["description"],
        priority=row["priority"],
        status=row["status"],
        category=row["category"],
        deadline=row["deadline"],
        completed_at=row["completed_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        csam_name=row["csam_name"],
        tpid=row["tpid"],
        agreement_id=row["agreement_id"],
        customer_name=row["customer_name"],
        customer_type=row["customer_type"],
        notes=list(row["notes"] or []),
        subtasks=_subtasks_from_json(row["subtasks"]),
        assigned_to=row["assigned_to"],
        tags=list(row["tags"] or []),
    )


def _to_params(ticket: TicketEntity) -> dict[str, Any]:
    return {
        "id": ticket.id,
        "ticket_code": ticket.ticket_id,
        "title": ticket.title,
        "description": ticket.description,
        "priority": ticket.priority,
        "status": ticket.status,
        "category": ticket.category,
        "deadline": ticket.deadline,
        "completed_at": ticket.completed_at,
        "created_at": ticket.created_at,
        "updated_at": ticket.updated_at,
        "csam_name": ticket.csam_name,
        "tpid": ticket.tpid,
        "agreement_id": ticket.agreement_id,
        "customer_name": ticket.customer_name,
        "customer_type": ticket.customer_type,
        "notes": Jsonb(ticket.notes),
        "subtasks": Jsonb(_subtasks_to_json(ticket.subtasks)),
        "assigned_to": ticket.assigned_to,
        "tags": Jsonb(ticket.tags),
    }


class PostgresTicketRepository:
    backend = "postgres"

    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    @contextmanager
    def _use_connection(self, connection: Connection | None) -> Iterator[Connection]:
        if connection is not None:
            yield connection
            return
        with get_connection(self.database_url) as managed:
            yield managed

    def list(self, connection: Connection | None = None) -> list[TicketEntity]:
        query = f"SELECT {TICKET_COLUMNS} FROM tickets ORDER BY seq ASC"
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query)
                rows = cursor.fetchall()
        return [_to_ticket_entity(row) for row in rows]

    def get_by_id(
        self,
        ticket_id: str,
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        query = f"SELECT {TICKET_COLUMNS} FROM tickets WHERE id = %s"
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (ticket_id,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def get_by_ticket_code(
        self,
        ticket_code: str,
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        query = f"SELECT {TICKET_COLUMNS} FROM tickets WHERE ticket_code = %s"
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (ticket_code,))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def insert(self, ticket: TicketEntity, connection: Connection | None = None) -> TicketEntity:
        query = f"""
            INSERT INTO tickets (
                id, ticket_code, title, description, priority, status, category, deadline,
                completed_at, created_at, updated_at, csam_name, tpid, agreement_id,
                customer_name, customer_type, notes, subtasks, assigned_to, tags
            )
            VALUES (
                %(id)s, %(ticket_code)s, %(title)s, %(description)s, %(priority)s,
                %(status)s, %(category)s, %(deadline)s, %(completed_at)s, %(created_at)s,
                %(updated_at)s, %(csam_name)s, %(tpid)s, %(agreement_id)s,
                %(customer_name)s, %(customer_type)s, %(notes)s, %(subtasks)s,
                %(assigned_to)s, %(tags)s
            )
            RETURNING {TICKET_COLUMNS}
        """
        try:
            with self._use_connection(connection) as active_connection:
                with active_connection.cursor() as cursor:
                    cursor.execute(query, _to_params(ticket))
                    row = cursor.fetchone()
        except UniqueViolation as exc:
            raise DuplicateTicketCodeError(ticket.ticket_id) from exc
        if row is None:
            raise RuntimeError("Failed to create ticket.")
        return _to_ticket_entity(row)

    def update(
        self,
        ticket: TicketEntity,
        connection: Connection | None = None,
    ) -> TicketEntity | None:
        query = f"""
            UPDATE tickets
            SET title = %(title)s,
                description = %(description)s,
                priority = %(priority)s,
                status = %(status)s,
                category = %(category)s,
                deadline = %(deadline)s,
                completed_at = %(completed_at)s,
                updated_at = %(updated_at)s,
                csam_name = %(csam_name)s,
                tpid = %(tpid)s,
                agreement_id = %(agreement_id)s,
                customer_name = %(customer_name)s,
                customer_type = %(customer_type)s,
                notes = %(notes)s,
                subtasks = %(subtasks)s,
                assigned_to = %(assigned_to)s,
                tags = %(tags)s
            WHERE id = %(id)s
            RETURNING {TICKET_COLUMNS}
        """
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, _to_params(ticket))
                row = cursor.fetchone()
        if row is None:
            return None
        return _to_ticket_entity(row)

    def delete(self, ticket_id: str, connection: Connection | None = None) -> bool:
        query = "DELETE FROM tickets WHERE id = %s"
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute(query, (ticket_id,))
                return cursor.rowcount > 0

    def count(self, connection: Connection | None = None) -> int:
        with self._use_connection(connection) as active_connection:
            with active_connection.cursor() as cursor:
                cursor.execute("SELECT COUNT(1) AS total FROM tickets")
                row = cursor.fetchone()
        return int(row["total"]) if row is not None else 0
