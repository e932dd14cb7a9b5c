"""Dashboard pipeline: wires a record source and settings to the pure cores.

Data flow:
  1. Source fetch → records of one kind
  2. Search settings → fields and category field for that kind
  3. filter_entities / job_progress → derived values for rendering
"""

import json
import logging
from typing import Any

from bizdash.core.config import Settings
from bizdash.core.schemas import Job, JobProgress, MatchResult
from bizdash.pipeline.progress import job_progress
from bizdash.pipeline.search import filter_entities
from bizdash.sources.base import RecordSource

logger = logging.getLogger(__name__)


def search_records(
    source: RecordSource,
    kind: str,
    query: str,
    category: str | None,
    settings: Settings,
) -> list[MatchResult]:
    """Search one record kind using its configured fields.

    Raises:
        ValueError: If ``kind`` has no search configuration.
    """
    entity_config = settings.search.entities.get(kind)
    if entity_config is None:
        msg = f"no search configuration for '{kind}'"
        raise ValueError(msg)

    records = source.fetch(kind)
    matches = filter_entities(
        records,
        query,
        category if category is not None else settings.search.all_category,
        entity_config.fields,
        category_field=entity_config.category_field,
        all_category=settings.search.all_category,
        marker=settings.search.marker,
    )
    logger.info("Search %s for %r: %d of %d", kind, query, len(matches), len(records))
    return matches


def progress_report(source: RecordSource, now: int, settings: Settings) -> list[JobProgress]:
    """Compute progress for every job, with dates normalized to local midnight."""
    jobs: list[Job] = source.fetch("jobs")  # type: ignore[assignment]
    return [
        JobProgress(job=job, progress=job_progress(job, now, settings.jobs.timezone))
        for job in jobs
    ]


def _entity_dict(entity: Any) -> dict[str, Any]:
    if hasattr(entity, "model_dump"):
        return entity.model_dump()
    return dict(entity)


def export_results_json(matches: list[MatchResult]) -> str:
    """Export search matches as a JSON string."""
    data = [
        {
            "entity": _entity_dict(m.entity),
            "highlighted_fields": m.highlighted_fields,
        }
        for m in matches
    ]
    return json.dumps(data, indent=2)
