"""
Query result caching with time-to-live and invalidation tags

Entry lifecycle: absent -> cached (fresh) -> expired | invalidated -> absent.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Iterable, List, Optional, Set

from pipeline.interfaces import CacheService
from pipeline.timeout_guard import CancellationReason, CancellationToken, QueryCancelledError

logger = logging.getLogger(__name__)


def dynamic_content_key(channel: str, content_type: Optional[str], path: str,
                        language: str, skip: int, take: int) -> str:
    """Derived cache key for a dynamic content query"""
    return f"{channel}_DynamicContent_{path}_{language}_{content_type or ''}_{skip}_{take}"


@dataclass
class CacheEntry:
    """Cached value with its expiry and invalidation tags"""
    key: str
    value: Any
    ttl: float
    tags: FrozenSet[str] = frozenset()
    stored_at: float = 0.0

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


@dataclass
class CacheEntrySettings:
    """Settings handed to a factory on a cache miss.

    The factory may attach invalidation tags, change the ttl, or set
    cached=False to keep its result out of the cache.
    """
    key: str
    ttl: float
    cached: bool = True
    tags: List[str] = field(default_factory=list)


class QueryCache(CacheService):
    """LRU cache for query results with TTL expiry and tag invalidation"""

    def __init__(self, max_size: int = 100, default_ttl: float = 300.0,
                 single_flight: bool = False, clock: Callable[[], float] = time.monotonic):
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.single_flight = single_flight
        self.clock = clock
        self.cache: Dict[str, CacheEntry] = {}
        self.access_order: List[str] = []
        self.tag_index: Dict[str, Set[str]] = {}
        self._in_flight: Dict[str, asyncio.Task] = {}

    def get(self, key: str) -> Optional[Any]:
        """Get cached value if present and fresh"""
        entry = self.cache.get(key)
        if entry is None:
            return None
        if entry.is_expired(self.clock()):
            self._remove(key)
            return None
        self._update_access(key)
        return entry.value

    def put(self, key: str, value: Any, ttl: Optional[float] = None):
        """Cache value without tags"""
        self.put_with_tags(key, value, ttl if ttl is not None else self.default_ttl)

    def put_with_tags(self, key: str, value: Any, ttl: float, tags: Iterable[str] = ()):
        """Cache value under key with invalidation tags (last write wins)"""
        if self.max_size <= 0 or ttl <= 0:
            return

        if key in self.cache:
            self._remove(key)
        self._evict_if_needed()
        entry = CacheEntry(key=key, value=value, ttl=ttl, tags=frozenset(tags), stored_at=self.clock())
        self.cache[key] = entry
        for tag in entry.tags:
            self.tag_index.setdefault(tag, set()).add(key)
        self._update_access(key)

    def invalidate(self, key: str) -> bool:
        """Drop a single entry"""
        if key not in self.cache:
            return False
        self._remove(key)
        return True

    def invalidate_by_tag(self, tag: str) -> int:
        """Drop every entry carrying tag"""
        keys = self.tag_index.pop(tag, set())
        for key in keys:
            if key in self.cache:
                self._remove(key)
        if keys:
            logger.info(f"Invalidated {len(keys)} cached entries for tag {tag}")
        return len(keys)

    def clear(self):
        """Clear all cached results"""
        self.cache.clear()
        self.access_order.clear()
        self.tag_index.clear()

    def __len__(self) -> int:
        return len(self.cache)

    async def load_or_compute(
        self,
        key: str,
        factory: Callable[[CacheEntrySettings], Awaitable[Any]],
        ttl: Optional[float] = None,
        cancellation: Optional[CancellationToken] = None
    ) -> Any:
        """Return the cached value for key, computing and storing it on a miss.

        Raises:
            QueryCancelledError: cancellation fired before computing
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        if cancellation is not None and cancellation.is_cancelled:
            raise QueryCancelledError(CancellationReason.CANCELLED)

        ttl = self.default_ttl if ttl is None else ttl
        if not self.single_flight:
            return await self._compute(key, factory, ttl)
        return await self._compute_once(key, factory, ttl, cancellation)

    async def _compute(self, key: str, factory, ttl: float) -> Any:
        settings = CacheEntrySettings(key=key, ttl=ttl)
        value = await factory(settings)
        if settings.cached:
            self.put_with_tags(key, value, settings.ttl, settings.tags)
        return value

    async def _compute_once(self, key: str, factory, ttl: float,
                            cancellation: Optional[CancellationToken]) -> Any:
        """Share one in-flight computation between concurrent misses on key.

        The shared computation belongs to the caller that started it. When
        that caller cancels, joiners that were not cancelled themselves
        start a fresh computation with their own factory.
        """
        loop = asyncio.get_running_loop()
        while True:
            task = self._in_flight.get(key)
            if task is None or task.done() or task.get_loop() is not loop:
                task = loop.create_task(self._compute(key, factory, ttl))
                self._in_flight[key] = task
                task.add_done_callback(lambda done: self._forget_in_flight(key, done))
                return await asyncio.shield(task)

            logger.debug(f"Joining in-flight computation for {key}")
            try:
                return await self._join(task, cancellation)
            except QueryCancelledError as e:
                if e.timed_out or (cancellation is not None and cancellation.is_cancelled):
                    raise
                logger.debug(f"Owner of in-flight computation for {key} cancelled, recomputing")

    @staticmethod
    async def _join(task: asyncio.Task, cancellation: Optional[CancellationToken]) -> Any:
        """Wait for a shared computation, giving up early if cancellation fires"""
        if cancellation is None:
            return await asyncio.shield(task)

        caller_wait = asyncio.ensure_future(cancellation.wait())
        try:
            done, _ = await asyncio.wait({task, caller_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            caller_wait.cancel()
        if task in done:
            return task.result()
        raise QueryCancelledError(CancellationReason.CANCELLED)

    def _forget_in_flight(self, key: str, task: asyncio.Task):
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    def _remove(self, key: str):
        entry = self.cache.pop(key)
        if key in self.access_order:
            self.access_order.remove(key)
        for tag in entry.tags:
            keys = self.tag_index.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self.tag_index[tag]

    def _update_access(self, key: str):
        """Update LRU access order"""
        if key in self.access_order:
            self.access_order.remove(key)
        self.access_order.append(key)

    def _evict_if_needed(self):
        """Evict oldest entry if cache full"""
        if len(self.cache) >= self.max_size and self.access_order:
            self._remove(self.access_order[0])
