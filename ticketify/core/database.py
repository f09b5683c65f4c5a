from collections.abc import Iterator
from contextlib import contextmanager

from psycopg import Connection, connect
from psycopg.rows import dict_row

from ticketify.core.config import get_settings


def get_database_url() -> str:
    return get_settings().database_url


@contextmanager
def get_connection(database_url: str | None = None) -> Iterator[Connection]:
    url = database_url or get_database_url()
    with connect(url, row_factory=dict_row) as connection:
        yield connection


def ping_database(
    database_url: str | None = None,
    timeout_seconds: int = 3,
) -> tuple[bool, str | None]:
    url = database_url or get_database_url()
    try:
        with connect(url, connect_timeout=timeout_seconds) as connection:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                result = cursor.fetchone()
    except Exception as exc:
        return False, str(exc)
    if result and result[0] == 1:
        return True, None
    return False, "Database ping returned an unexpected result."
