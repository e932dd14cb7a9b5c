"""Record source backed by the local SQLite store."""

import logging
import sqlite3
from collections.abc import Callable

from bizdash.core.db import list_customers, list_employees, list_equipment, list_jobs
from bizdash.sources.base import Record, RecordSource

logger = logging.getLogger(__name__)

_FETCHERS: dict[str, Callable[[sqlite3.Connection], list]] = {
    "jobs": list_jobs,
    "equipment": list_equipment,
    "employees": list_employees,
    "customers": list_customers,
}


class SqliteSource(RecordSource):
    """Reads records from an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def fetch(self, kind: str) -> list[Record]:
        fetcher = _FETCHERS.get(kind)
        if fetcher is None:
            msg = f"unknown record kind: '{kind}'"
            raise ValueError(msg)
        records = fetcher(self._conn)
        logger.debug("Fetched %d %s", len(records), kind)
        return records
