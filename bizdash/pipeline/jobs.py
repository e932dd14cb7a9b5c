"""Job list helpers: summary stats, sorting, and pagination."""

import logging
from collections.abc import Sequence

from bizdash.core.schemas import Job, JobPage, JobStats

logger = logging.getLogger(__name__)

SORT_MODES = ("status", "date-asc", "date-desc")


def active_jobs(jobs: Sequence[Job]) -> list[Job]:
    """Return jobs whose status is 'active', in input order."""
    return [j for j in jobs if j.status == "active"]


def job_stats(jobs: Sequence[Job]) -> JobStats:
    """Count total and active jobs."""
    return JobStats(total_jobs=len(jobs), active_jobs=len(active_jobs(jobs)))


def sort_jobs(jobs: Sequence[Job], mode: str) -> list[Job]:
    """Sort jobs by status or creation date. Sorting is stable.

    Raises:
        ValueError: If ``mode`` is not one of SORT_MODES.
    """
    if mode == "status":
        return sorted(jobs, key=lambda j: j.status)
    if mode == "date-asc":
        return sorted(jobs, key=lambda j: j.created_at)
    if mode == "date-desc":
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)
    msg = f"sort mode must be one of {list(SORT_MODES)}, got '{mode}'"
    raise ValueError(msg)


def paginate(jobs: Sequence[Job], page: int, per_page: int = 6) -> JobPage:
    """Return one 1-based page of jobs.

    Out-of-range page numbers are clamped to the first or last page. An
    empty list yields a single empty page.
    """
    if per_page < 1:
        msg = f"per_page must be at least 1, got {per_page}"
        raise ValueError(msg)

    total_pages = max(1, -(-len(jobs) // per_page))
    clamped = max(1, min(page, total_pages))
    if clamped != page:
        logger.debug("Page %d out of range, using %d of %d", page, clamped, total_pages)

    start = (clamped - 1) * per_page
    return JobPage(
        items=list(jobs[start:start + per_page]),
        page=clamped,
        total_pages=total_pages,
        per_page=per_page,
    )
