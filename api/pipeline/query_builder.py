"""Structured query composition.

ContentQueryBuilder combines scope, ordering, predicates, language and
pagination into a single ContentQuery consumed by the execution engine.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from pipeline.parameter_normalizer import FilterParser, parse_order
from pipeline.scope_resolver import PathScopeResolver, is_only_this_page
from value_objects import OrderSpec, Pagination, Predicate, ScopeFilter


@dataclass(frozen=True)
class ContentQuery:
    """Engine-facing query.

    channel is None when no content type was requested: such queries only
    filter by language, across every content type.
    """
    language: str
    content_type: Optional[str] = None
    channel: Optional[str] = None
    scope: ScopeFilter = field(default_factory=ScopeFilter.none)
    order: Optional[OrderSpec] = None
    predicates: Tuple[Predicate, ...] = ()
    pagination: Pagination = field(default_factory=Pagination)
    diagnostics: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def is_typed(self) -> bool:
        return self.content_type is not None


class ContentQueryBuilder:
    """Builds a ContentQuery from a dynamic content request"""

    def __init__(self, scope_resolver: PathScopeResolver = None, filter_parser: FilterParser = None):
        self.scope_resolver = scope_resolver or PathScopeResolver()
        self.filter_parser = filter_parser or FilterParser()

    def build(self, request, channel: str, language: str) -> ContentQuery:
        """Compose the query for request executed against channel in language

        Args:
            request: DynamicContentRequest (or anything with the same attributes)
            channel: Website channel name
            language: Effective language (defaults already applied)
        """
        if not request.content_type:
            return ContentQuery(language=language)

        parsed_filter = self.filter_parser.parse(request.where_condition)
        diagnostics = (parsed_filter.diagnostic,) if parsed_filter.diagnostic else ()

        return ContentQuery(
            language=language,
            content_type=request.content_type,
            channel=channel,
            scope=self.scope_resolver.resolve(
                request.path,
                is_only_this_page(request.type_content_path),
                request.maximum_nesting_level
            ),
            order=parse_order(request.order_by),
            predicates=parsed_filter.predicates,
            pagination=Pagination.resolve(request.skip, request.take, request.select_top_n_pages),
            diagnostics=diagnostics
        )
