"""Search, filter and highlight over in-memory record lists.

Filter order:
  1. CategoryFilter: exact, case-sensitive match on one field ("All" passes all)
  2. QueryFilter: case-insensitive literal substring over the searched fields

Queries are literal text, never patterns: "a.b" only matches "a.b".
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from bizdash.core.schemas import MatchResult

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
DEFAULT_MARKER = ("<mark>", "</mark>")

# A filter is a callable that takes entities and returns a subset, in order.
Filter = Callable[[list[Any]], list[Any]]


def field_value(entity: Any, name: str) -> str:
    """Read a string field from a model (attribute) or a dict (key)."""
    if isinstance(entity, Mapping):
        value = entity.get(name)
    else:
        value = getattr(entity, name, None)
    if value is None:
        return ""
    return str(value)


def _literal_pattern(query: str) -> re.Pattern[str]:
    return re.compile(re.escape(query), re.IGNORECASE)


class CategoryFilter:
    """Keep entities whose category field equals the selected category exactly."""

    def __init__(
        self,
        category: str,
        field: str,
        all_category: str = ALL_CATEGORIES,
    ) -> None:
        self._category = category
        self._field = field
        self._all = all_category

    def __call__(self, entities: list[Any]) -> list[Any]:
        if self._category == self._all:
            return entities
        result = [e for e in entities if field_value(e, self._field) == self._category]
        removed = len(entities) - len(result)
        if removed:
            logger.debug("CategoryFilter: removed %d entities", removed)
        return result


class QueryFilter:
    """Keep entities where any searched field contains the query (case-insensitive).

    An empty query is a no-op.
    """

    def __init__(self, query: str, fields: Sequence[str]) -> None:
        self._fields = list(fields)
        self._pattern = _literal_pattern(query) if query else None

    def __call__(self, entities: list[Any]) -> list[Any]:
        if self._pattern is None:
            return entities
        pattern = self._pattern
        result = [e for e in entities if self._matches(e, pattern)]
        removed = len(entities) - len(result)
        if removed:
            logger.debug("QueryFilter: removed %d entities", removed)
        return result

    def _matches(self, entity: Any, pattern: re.Pattern[str]) -> bool:
        return any(pattern.search(field_value(entity, f)) for f in self._fields)


def run_filter_chain(entities: Sequence[Any], filters: list[Filter]) -> list[Any]:
    """Apply filters in order, returning the surviving entities."""
    result = list(entities)
    for f in filters:
        result = f(result)
    return result


def highlight(text: str, query: str, marker: tuple[str, str] = DEFAULT_MARKER) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in the marker pair.

    The matched text keeps its original casing; everything else is untouched.
    """
    if not query:
        return text
    open_tag, close_tag = marker
    return _literal_pattern(query).sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", text)


def filter_entities(
    entities: Sequence[Any],
    query: str,
    category_filter: str = ALL_CATEGORIES,
    fields_to_search: Sequence[str] = (),
    *,
    category_field: str = "location",
    all_category: str = ALL_CATEGORIES,
    marker: tuple[str, str] = DEFAULT_MARKER,
) -> list[MatchResult]:
    """Narrow by category, then by free-text query, and annotate matches.

    Args:
        entities: Records to search (models or dicts). Not modified.
        query: Free text; empty means "no text search".
        category_filter: Category value to keep, or ``all_category`` for all.
        fields_to_search: Ordered field names searched and highlighted.
        category_field: Field compared against ``category_filter``.
        all_category: The sentinel meaning "no category narrowing".
        marker: Opening and closing highlight markup.

    Returns:
        MatchResult list in input order. Highlights are empty when the
        query is empty.
    """
    filters: list[Filter] = [
        CategoryFilter(category_filter, category_field, all_category),
        QueryFilter(query, fields_to_search),
    ]
    retained = run_filter_chain(entities, filters)
    logger.debug(
        "filter_entities: %d of %d kept (query=%r, category=%r)",
        len(retained), len(entities), query, category_filter,
    )

    if not query:
        return [MatchResult(entity=e) for e in retained]

    return [
        MatchResult(
            entity=e,
            highlighted_fields={
                f: highlight(field_value(e, f), query, marker) for f in fields_to_search
            },
        )
        for e in retained
    ]
