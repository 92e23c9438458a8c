"""
In-memory content store executing structured content queries.

Implements ContentQueryEngine over a list of ContentRecords, typically loaded
from a YAML seed by ContentSeedLoader. Honours channel, language, content
type, path scope, predicates, ordering, pagination, preview and secured-item
visibility.
"""

import asyncio
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from domain_models import ContentRecord, ExecutionOptions
from pipeline.interfaces import ContentQueryEngine
from pipeline.query_builder import ContentQuery
from pipeline.timeout_guard import CancellationToken
from value_objects import OrderSpec, PredicateOperator, ScopeKind

logger = logging.getLogger(__name__)


class InMemoryContentStore(ContentQueryEngine):
    """Content store holding every record in memory.

    latency simulates a slow backend (seconds awaited before each query).
    """

    def __init__(self, records: Optional[Iterable[ContentRecord]] = None, latency: float = 0.0):
        self.records: List[ContentRecord] = list(records or [])
        self.latency = latency

    def add(self, record: ContentRecord):
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    async def run(
        self,
        query: ContentQuery,
        options: ExecutionOptions,
        cancellation: Optional[CancellationToken] = None
    ) -> List[ContentRecord]:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        if cancellation is not None:
            cancellation.raise_if_cancelled()

        matches = [record for record in self.records if self._matches(record, query, options)]
        if query.order is not None:
            matches = _ordered(matches, query.order)
        results = query.pagination.apply(matches)
        logger.debug(f"{self.name} matched {len(matches)} records, returning {len(results)}")
        return results

    def _matches(self, record: ContentRecord, query: ContentQuery, options: ExecutionOptions) -> bool:
        if record.language != query.language:
            return False
        if not record.published and not options.for_preview:
            return False
        if record.secured and not options.include_secured_items:
            return False
        if query.content_type is not None and record.content_type != query.content_type:
            return False
        if query.channel is not None and not self._in_channel(record, query.channel):
            return False
        if not _in_scope(record, query):
            return False
        return all(_satisfies(record, predicate) for predicate in query.predicates)

    @staticmethod
    def _in_channel(record: ContentRecord, channel: str) -> bool:
        """Website queries only see web pages of that channel"""
        return record.is_web_page and record.channel == channel


def _in_scope(record: ContentRecord, query: ContentQuery) -> bool:
    scope = query.scope
    if scope.kind is ScopeKind.NONE:
        return True
    if record.page is None:
        return False

    tree_path = record.page.tree_path
    if scope.kind is ScopeKind.SINGLE:
        return tree_path == scope.path
    if scope.kind is ScopeKind.CHILDREN:
        return tree_path != scope.path and record.page.parent_path == scope.path
    return tree_path == scope.path or tree_path.startswith(scope.path + "/")


def _satisfies(record: ContentRecord, predicate) -> bool:
    value = record.get(predicate.field)
    if value is None:
        return False
    text = _as_text(value)
    if predicate.operator is PredicateOperator.CONTAINS:
        return predicate.literal.lower() in text.lower()
    if isinstance(value, bool):
        return text == predicate.literal.lower()
    return text == predicate.literal


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _sort_key(value: Any):
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return (0, float(value), "")
    if isinstance(value, datetime):
        return (1, 0.0, value.isoformat())
    if isinstance(value, date):
        return (1, 0.0, datetime(value.year, value.month, value.day).isoformat())
    return (2, 0.0, _as_text(value))


def _ordered(records: List[ContentRecord], order: OrderSpec) -> List[ContentRecord]:
    """Stable sort on one field; records missing the field go last"""
    present = [record for record in records if record.get(order.field) is not None]
    missing = [record for record in records if record.get(order.field) is None]
    present.sort(key=lambda record: _sort_key(record.get(order.field)), reverse=order.descending)
    return present + missing
