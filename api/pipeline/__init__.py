"""Query pipeline for dynamic content.

This package turns loosely-typed request parameters into results:
- Parameter normalization (parse_order, FilterParser)
- Path scope resolution (PathScopeResolver)
- Structured query composition (ContentQueryBuilder)
- Timeout and cancellation (TimeoutGuard)
- Result normalization (ResultNormalizer, ContentTypeRegistry)

Principles:
- Single Responsibility Principle
- Dependency Injection
"""

from .parameter_normalizer import FilterParser, parse_filter, parse_order
from .scope_resolver import PathScopeResolver
from .query_builder import ContentQuery, ContentQueryBuilder
from .timeout_guard import CancellationToken, QueryCancelledError, TimeoutGuard
from .content_types import ContentTypeRegistry
from .result_normalizer import ResultNormalizer

__all__ = [
    'FilterParser', 'parse_filter', 'parse_order', 'PathScopeResolver',
    'ContentQuery', 'ContentQueryBuilder', 'CancellationToken',
    'QueryCancelledError', 'TimeoutGuard', 'ContentTypeRegistry', 'ResultNormalizer',
]
