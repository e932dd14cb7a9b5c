"""Core data models for the dashboard: records, time spans, and derived values."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JobStatus = Literal["active", "pending", "complete", "inactive"]

RECORD_KINDS: tuple[str, ...] = ("jobs", "equipment", "employees", "customers")


class TimeSpan(BaseModel):
    """A start/end pair in epoch milliseconds.

    No ordering is enforced here; the progress calculator treats
    start >= end (or a missing bound) as degenerate.
    """

    model_config = ConfigDict(frozen=True)

    start_millis: int | None = None
    end_millis: int | None = None


class ProgressResult(BaseModel):
    """Derived progress of a job relative to a point in time."""

    model_config = ConfigDict(frozen=True)

    progress_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    elapsed_days: int = Field(default=0, ge=0)
    days_left: int = Field(default=0, ge=0)


class MatchResult(BaseModel):
    """A searched record paired with its highlighted field values.

    ``highlighted_fields`` is empty when the search query was empty.
    """

    model_config = ConfigDict(frozen=True)

    entity: Any
    highlighted_fields: dict[str, str] = Field(default_factory=dict)


class Job(BaseModel):
    """A unit of work owned by the company."""

    model_config = ConfigDict(frozen=True)

    id: str
    job_name: str
    status: JobStatus = "active"
    description: str = ""
    start_date: int | None = None
    end_date: int | None = None
    created_at: int = 0
    assigned_employees: list[str] = Field(default_factory=list)
    selected_customer: str | None = None
    selected_equipment: list[str] = Field(default_factory=list)
    costs: float = 0.0
    charge: float = 0.0
    taxes: float = 0.0
    expenses: float = 0.0
    repeats: str = "no"


class Equipment(BaseModel):
    """A piece of company equipment. Missing labels fall back to placeholders."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Unknown"
    type: str = "Unknown"
    serial_number: str = "N/A"
    location: str = ""


class Employee(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    position: str = ""
    email: str = ""
    phone: str = ""


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""


class JobStats(BaseModel):
    """Summary counts shown on the jobs card."""

    model_config = ConfigDict(frozen=True)

    total_jobs: int = Field(default=0, ge=0)
    active_jobs: int = Field(default=0, ge=0)


class JobPage(BaseModel):
    """One page of a job list (1-based)."""

    model_config = ConfigDict(frozen=True)

    items: list[Job] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=1, ge=1)
    per_page: int = Field(default=6, ge=1)


class JobProgress(BaseModel):
    """Wrapper that pairs a frozen Job with its computed progress."""

    model_config = ConfigDict(frozen=True)

    job: Job
    progress: ProgressResult
