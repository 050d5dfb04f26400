from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

import psycopg
from psycopg import Connection

from underwriting.core.settings import Settings, get_settings


def get_dsn(settings: Settings | None = None) -> str:
    active_settings = settings or get_settings()
    return active_settings.postgres_dsn


@contextmanager
def get_conn(settings: Settings | None = None) -> Generator[Connection, None, None]:
    with psycopg.connect(get_dsn(settings), autocommit=True) as conn:
        yield conn
