"""Load company records from a YAML file into the record store."""

import logging
import sqlite3
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from bizdash.core.db import upsert_customer, upsert_employee, upsert_equipment, upsert_job
from bizdash.core.schemas import Customer, Employee, Equipment, Job

logger = logging.getLogger(__name__)


class RecordBundle(BaseModel):
    """All record lists from one YAML document. Every section is optional."""

    jobs: list[Job] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list)
    customers: list[Customer] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "jobs": len(self.jobs),
            "equipment": len(self.equipment),
            "employees": len(self.employees),
            "customers": len(self.customers),
        }


def load_records_yaml(path: str | Path) -> RecordBundle:
    """Parse and validate a YAML record file."""
    path = Path(path)
    if not path.exists():
        msg = f"Records file not found: {path}"
        raise FileNotFoundError(msg)
    raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
    return RecordBundle.model_validate(raw)


def store_bundle(conn: sqlite3.Connection, bundle: RecordBundle) -> dict[str, int]:
    """Write every record in the bundle. Returns per-kind counts written."""
    for job in bundle.jobs:
        upsert_job(conn, job)
    for item in bundle.equipment:
        upsert_equipment(conn, item)
    for employee in bundle.employees:
        upsert_employee(conn, employee)
    for customer in bundle.customers:
        upsert_customer(conn, customer)

    counts = bundle.counts()
    logger.info("Stored records: %s", counts)
    return counts
