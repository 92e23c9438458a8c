"""Cache service interface.

Defines the contract for the tag-aware result cache injected into the
query executor.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Iterable, Optional


class CacheService(ABC):
    """Interface for result caches with time-to-live and invalidation tags.

    Contract:
        - get() returns None for absent, expired or invalidated keys
        - put_with_tags() replaces any existing entry (last write wins)
        - invalidate_by_tag() removes every entry carrying the tag
        - load_or_compute() returns the cached value or stores what the
          factory produces; the factory may attach tags to the entry
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def put_with_tags(self, key: str, value: Any, ttl: float, tags: Iterable[str] = ()):
        pass

    @abstractmethod
    def invalidate_by_tag(self, tag: str) -> int:
        """Invalidate all entries carrying tag; returns how many were removed"""
        pass

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    async def load_or_compute(
        self,
        key: str,
        factory: Callable[[Any], Awaitable[Any]],
        ttl: Optional[float] = None,
        cancellation=None
    ) -> Any:
        pass
