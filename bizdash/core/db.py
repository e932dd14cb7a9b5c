"""SQLite record store for jobs, equipment, employees, and customers."""

import json
import sqlite3
from pathlib import Path
from typing import Any

from bizdash.core.schemas import Customer, Employee, Equipment, Job

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id                  TEXT PRIMARY KEY,
    job_name            TEXT    NOT NULL,
    status              TEXT    NOT NULL DEFAULT 'active',
    description         TEXT    NOT NULL DEFAULT '',
    start_date          INTEGER,
    end_date            INTEGER,
    created_at          INTEGER NOT NULL DEFAULT 0,
    assigned_employees  TEXT    NOT NULL DEFAULT '[]',
    selected_customer   TEXT,
    selected_equipment  TEXT    NOT NULL DEFAULT '[]',
    costs               REAL    NOT NULL DEFAULT 0.0,
    charge              REAL    NOT NULL DEFAULT 0.0,
    taxes               REAL    NOT NULL DEFAULT 0.0,
    expenses            REAL    NOT NULL DEFAULT 0.0,
    repeats             TEXT    NOT NULL DEFAULT 'no'
);
"""

_EQUIPMENT_TABLE = """
CREATE TABLE IF NOT EXISTS equipment (
    id              TEXT PRIMARY KEY,
    name            TEXT NOT NULL DEFAULT 'Unknown',
    type            TEXT NOT NULL DEFAULT 'Unknown',
    serial_number   TEXT NOT NULL DEFAULT 'N/A',
    location        TEXT NOT NULL DEFAULT ''
);
"""

_EMPLOYEES_TABLE = """
CREATE TABLE IF NOT EXISTS employees (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    position    TEXT NOT NULL DEFAULT '',
    email       TEXT NOT NULL DEFAULT '',
    phone       TEXT NOT NULL DEFAULT ''
);
"""

_CUSTOMERS_TABLE = """
CREATE TABLE IF NOT EXISTS customers (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    email       TEXT NOT NULL DEFAULT '',
    phone       TEXT NOT NULL DEFAULT '',
    address     TEXT NOT NULL DEFAULT ''
);
"""

# Record kind -> table name. Table names never come from user input.
_TABLES: dict[str, str] = {
    "jobs": "jobs",
    "equipment": "equipment",
    "employees": "employees",
    "customers": "customers",
}

_JSON_LIST_COLUMNS = ("assigned_employees", "selected_equipment")


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_JOBS_TABLE)
    conn.execute(_EQUIPMENT_TABLE)
    conn.execute(_EMPLOYEES_TABLE)
    conn.execute(_CUSTOMERS_TABLE)
    conn.commit()
    return conn


def _upsert(conn: sqlite3.Connection, table: str, row: dict[str, Any]) -> None:
    """Insert a row, or update it in place if the id already exists.

    Updating in place keeps the original rowid, so list order is stable.
    """
    columns = list(row)
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(f"{c} = excluded.{c}" for c in columns if c != "id")
    conn.execute(
        f"""
        INSERT INTO {table} ({", ".join(columns)})
        VALUES ({placeholders})
        ON CONFLICT(id) DO UPDATE SET {updates}
        """,
        [row[c] for c in columns],
    )
    conn.commit()


def upsert_job(conn: sqlite3.Connection, job: Job) -> None:
    row = job.model_dump()
    for column in _JSON_LIST_COLUMNS:
        row[column] = json.dumps(row[column])
    _upsert(conn, "jobs", row)


def upsert_equipment(conn: sqlite3.Connection, item: Equipment) -> None:
    _upsert(conn, "equipment", item.model_dump())


def upsert_employee(conn: sqlite3.Connection, employee: Employee) -> None:
    _upsert(conn, "employees", employee.model_dump())


def upsert_customer(conn: sqlite3.Connection, customer: Customer) -> None:
    _upsert(conn, "customers", customer.model_dump())


def _job_from_row(row: sqlite3.Row) -> Job:
    data = dict(row)
    for column in _JSON_LIST_COLUMNS:
        data[column] = json.loads(data[column])
    return Job.model_validate(data)


def list_jobs(conn: sqlite3.Connection) -> list[Job]:
    """Return all jobs in insertion order."""
    rows = conn.execute("SELECT * FROM jobs ORDER BY rowid").fetchall()
    return [_job_from_row(r) for r in rows]


def get_job(conn: sqlite3.Connection, job_id: str) -> Job | None:
    """Return a single job, or None if it does not exist."""
    row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
    if row is None:
        return None
    return _job_from_row(row)


def list_equipment(conn: sqlite3.Connection) -> list[Equipment]:
    rows = conn.execute("SELECT * FROM equipment ORDER BY rowid").fetchall()
    return [Equipment.model_validate(dict(r)) for r in rows]


def list_employees(conn: sqlite3.Connection) -> list[Employee]:
    rows = conn.execute("SELECT * FROM employees ORDER BY rowid").fetchall()
    return [Employee.model_validate(dict(r)) for r in rows]


def list_customers(conn: sqlite3.Connection) -> list[Customer]:
    rows = conn.execute("SELECT * FROM customers ORDER BY rowid").fetchall()
    return [Customer.model_validate(dict(r)) for r in rows]


def delete_record(conn: sqlite3.Connection, kind: str, record_id: str) -> bool:
    """Delete a record by id. Returns True if a row was removed.

    Raises:
        ValueError: If ``kind`` is not a known record kind.
    """
    table = _TABLES.get(kind)
    if table is None:
        msg = f"unknown record kind: '{kind}'"
        raise ValueError(msg)
    cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
    conn.commit()
    return cursor.rowcount > 0
