import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from config import DEFAULT_LANGUAGE
from domain_models import ChannelContext
from models import DynamicContentRequest
from pipeline.query_builder import ContentQuery, ContentQueryBuilder
from pipeline.result_normalizer import ResultNormalizer
from pipeline.scope_resolver import is_only_this_page, normalize_path
from pipeline.timeout_guard import CancellationToken, QueryCancelledError, TimeoutGuard
from query_cache import dynamic_content_key
from value_objects import CacheOutcome, QueryOutcome, QueryStatus

logger = logging.getLogger(__name__)


class DynamicContentExecutor:
    """Executes dynamic content queries with caching, timeout and normalization.

    Never raises across its public methods: timeouts, cancellations and
    engine failures all come back as an empty item list, with the reason
    recorded on the QueryOutcome.
    """

    def __init__(self, engine, channel: ChannelContext, cache=None, normalizer=None,
                 builder=None, guard=None, default_language: str = DEFAULT_LANGUAGE,
                 cache_ttl: float = 300.0, article_repository=None):
        self.engine = engine
        self.channel = channel
        self.cache = cache
        self.normalizer = normalizer or ResultNormalizer()
        self.builder = builder or ContentQueryBuilder()
        self.guard = guard or TimeoutGuard()
        self.default_language = default_language
        self.cache_ttl = cache_ttl
        self.article_repository = article_repository

    async def query_dynamic_content(self, request: DynamicContentRequest,
                                    cancellation: Optional[CancellationToken] = None) -> List[Dict[str, Any]]:
        """Normalized items for request (empty on any failure)"""
        outcome = await self.execute(request, cancellation)
        return outcome.items

    async def execute(self, request: DynamicContentRequest,
                      cancellation: Optional[CancellationToken] = None) -> QueryOutcome:
        """Execute request and report how it went"""
        language = request.language or self.default_language
        diagnostics: List[str] = []
        logger.info(
            f"Fetching content with parameters: Path={request.path}, Language={language}, "
            f"ContentType={request.content_type}, TypeContentPath={request.type_content_path}, "
            f"Skip={request.skip}, Take={request.take}"
        )

        try:
            query = self.builder.build(request, self.channel.name, language)
            diagnostics.extend(query.diagnostics)

            async def fetch():
                if self._uses_article_repository(request):
                    served = await self._from_article_repository(request, language, cancellation, diagnostics)
                    if served is not None:
                        return served
                return await self._fetch(query, cancellation)

            if request.bypass_cache or self.cache is None:
                items = await fetch()
                cache = CacheOutcome.BYPASS if request.bypass_cache else CacheOutcome.DISABLED
                return QueryOutcome(items=items, cache=cache, diagnostics=diagnostics)

            return await self._execute_cached(request, fetch, cancellation, diagnostics)
        except QueryCancelledError as e:
            logger.warning(f"Dynamic content query {'timed out' if e.timed_out else 'was cancelled'}, returning empty result")
            status = QueryStatus.TIMED_OUT if e.timed_out else QueryStatus.CANCELLED
            return QueryOutcome(items=[], status=status, diagnostics=diagnostics + [str(e)])
        except Exception as e:
            logger.error(f"Error fetching dynamic content: {e}", exc_info=True)
            return QueryOutcome(items=[], status=QueryStatus.FAILED,
                                diagnostics=diagnostics + [f"Execution failed: {e}"])

    def get_dynamic_pages(self, content_type: str, path: Optional[str] = None, limit: Optional[int] = None,
                          offset: Optional[int] = None, order_by: str = "DocumentPublishFrom",
                          order_direction: str = "desc") -> List[Dict[str, Any]]:
        """Blocking adapter kept for older call sites"""
        request = DynamicContentRequest(
            path=path or "/",
            content_type=content_type,
            order_by=f"{order_by} {order_direction}",
            select_top_n_pages=limit or 0,
            skip=offset or 0
        )
        return run_blocking(self.query_dynamic_content(request))

    def cache_key_for(self, request: DynamicContentRequest) -> str:
        """Effective cache key: the explicit override or the derived key"""
        if request.cache_key:
            return request.cache_key
        language = request.language or self.default_language
        return dynamic_content_key(
            self.channel.name, request.content_type, normalize_path(request.path),
            language, request.skip, request.take
        )

    async def _execute_cached(self, request, fetch, cancellation,
                              diagnostics: List[str]) -> QueryOutcome:
        key = self.cache_key_for(request)
        computed = False

        async def compute(settings):
            nonlocal computed
            computed = True
            settings.tags.append(self.channel.invalidation_tag)
            return await fetch()

        items = await self.cache.load_or_compute(key, compute, self.cache_ttl, cancellation)
        logger.info(f"Found {len(items)} items for query")
        return QueryOutcome(
            items=[dict(item) for item in items],
            cache=CacheOutcome.MISS if computed else CacheOutcome.HIT,
            cache_key=key,
            diagnostics=diagnostics
        )

    async def _fetch(self, query: ContentQuery, cancellation) -> List[Dict[str, Any]]:
        """Run query on the engine under the guard and normalize the records"""
        options = self.channel.execution_options()
        records = await self.guard.run(
            lambda token: self.engine.run(query, options, token),
            cancellation
        )
        return self.normalizer.normalize_all(records)

    def _uses_article_repository(self, request) -> bool:
        """Plain newest-first article listings over a subtree"""
        repository = self.article_repository
        if repository is None or request.content_type != repository.content_type:
            return False
        if request.where_condition or (request.order_by or "").strip():
            return False
        return not is_only_this_page(request.type_content_path) and request.maximum_nesting_level <= 0

    async def _from_article_repository(self, request, language: str, cancellation,
                                       diagnostics: List[str]) -> Optional[List[Dict[str, Any]]]:
        """Normalized article pages, or None when the repository fails"""
        repository = self.article_repository
        take = request.take if request.take > 0 else request.select_top_n_pages
        fetch = take + request.skip if take > 0 else 0
        try:
            articles = await self.guard.run(
                lambda token: repository.get_article_pages(request.path, language, self.channel.is_preview, fetch),
                cancellation
            )
        except QueryCancelledError:
            raise
        except Exception as e:
            logger.warning(f"Error using ArticleRepository with pagination: {e}. Falling back to default query.")
            diagnostics.append(f"Article repository failed, used generic query: {e}")
            return None

        if request.skip > 0:
            articles = articles[request.skip:]
        logger.info(f"Found {len(articles)} articles using ArticleRepository")
        diagnostics.append("Served by article repository")
        return self.normalizer.normalize_all(articles)


def run_blocking(coro):
    """Run coro to completion from synchronous code.

    Inside a running event loop the coroutine gets its own loop on a worker
    thread, so the caller's loop is never re-entered.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()
