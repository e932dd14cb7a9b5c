"""Job progress calculation over a start/end date range.

Day counting rounds the total span up and the elapsed time down, so a
same-day job counts as one day and a partial elapsed day is not counted.
The percentage is clamped to 0-100.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from bizdash.core.schemas import Job, ProgressResult, TimeSpan

logger = logging.getLogger(__name__)

MILLIS_PER_DAY = 86_400_000


def total_days(start_millis: int | None, end_millis: int | None) -> int:
    """Return the span length in whole days, rounded up (0 when degenerate)."""
    if start_millis is None or end_millis is None or start_millis >= end_millis:
        return 0
    return -((start_millis - end_millis) // MILLIS_PER_DAY)


def compute_progress(
    start_millis: int | None,
    end_millis: int | None,
    now: int,
) -> ProgressResult:
    """Derive elapsed days, days left and completion percentage at ``now``.

    Args:
        start_millis: Job start, epoch milliseconds (None if unset).
        end_millis: Job end, epoch milliseconds (None if unset).
        now: Current time in epoch milliseconds, supplied by the caller.

    Returns:
        ProgressResult. A missing bound or start >= end yields all zeros.
    """
    total = total_days(start_millis, end_millis)
    if total == 0:
        return ProgressResult()

    elapsed = max(0, (now - start_millis) // MILLIS_PER_DAY)  # type: ignore[operator]
    days_left = max(0, total - elapsed)
    percentage = max(0.0, min(100.0, elapsed / total * 100))

    return ProgressResult(
        progress_percentage=percentage,
        elapsed_days=elapsed,
        days_left=days_left,
    )


def normalize_to_midnight(millis: int, tz: str) -> int:
    """Truncate an epoch-millisecond timestamp to local midnight in ``tz``."""
    local = datetime.fromtimestamp(millis // 1000, ZoneInfo(tz))
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp()) * 1000


def job_span(job: Job, tz: str | None = None) -> TimeSpan:
    """Return the job's date range, normalized to midnight when ``tz`` is given."""
    start, end = job.start_date, job.end_date
    if tz is not None:
        start = normalize_to_midnight(start, tz) if start is not None else None
        end = normalize_to_midnight(end, tz) if end is not None else None
    return TimeSpan(start_millis=start, end_millis=end)


def job_progress(job: Job, now: int, tz: str | None = None) -> ProgressResult:
    """Compute progress for a job's (optionally normalized) date range."""
    span = job_span(job, tz)
    result = compute_progress(span.start_millis, span.end_millis, now)
    logger.debug(
        "Job '%s': %d elapsed, %d left (%.1f%%)",
        job.id, result.elapsed_days, result.days_left, result.progress_percentage,
    )
    return result
