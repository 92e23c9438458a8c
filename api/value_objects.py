"""
Value objects for the dynamic content query engine.

Principles:
- Immutable data structures
- Named instead of primitive types (no Primitive Obsession)
- Small, focused classes with single responsibility
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from config import ROOT_PATH


class ScopeKind(Enum):
    """Tree-path inclusion rule"""
    SINGLE = "single"        # Exact path only
    CHILDREN = "children"    # Direct descendants only
    SUBTREE = "subtree"      # Entire section, unbounded depth
    NONE = "none"            # Whole channel


@dataclass(frozen=True)
class ScopeFilter:
    """Path scope a query is restricted to.

    Use the named constructors; Single requires a non-root path.
    """
    kind: ScopeKind
    path: Optional[str] = None

    @classmethod
    def single(cls, path: str) -> 'ScopeFilter':
        if path == ROOT_PATH:
            raise ValueError("Single scope requires a non-root path")
        return cls(ScopeKind.SINGLE, path)

    @classmethod
    def children(cls, path: str) -> 'ScopeFilter':
        return cls(ScopeKind.CHILDREN, path)

    @classmethod
    def subtree(cls, path: str) -> 'ScopeFilter':
        return cls(ScopeKind.SUBTREE, path)

    @classmethod
    def none(cls) -> 'ScopeFilter':
        return cls(ScopeKind.NONE)

    def __str__(self) -> str:
        if self.kind is ScopeKind.NONE:
            return "None"
        return f"{self.kind.name.title()}({self.path})"


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class OrderSpec:
    """Field ordering parsed from an order expression"""
    field: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESCENDING


class PredicateOperator(Enum):
    EQUALS = "equals"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Predicate:
    """Single field-operator-literal filter condition"""
    field: str
    operator: PredicateOperator
    literal: str

    @classmethod
    def equals(cls, field: str, literal: str) -> 'Predicate':
        return cls(field, PredicateOperator.EQUALS, literal)

    @classmethod
    def contains(cls, field: str, literal: str) -> 'Predicate':
        return cls(field, PredicateOperator.CONTAINS, literal)


@dataclass(frozen=True)
class Pagination:
    """Resolved paging window.

    offset is the number of records skipped; limit caps the count (None = unbounded).
    """
    offset: int = 0
    limit: Optional[int] = None

    @classmethod
    def resolve(cls, skip: int, take: int, top_n: int) -> 'Pagination':
        """Prefer skip/take when either is set, else fall back to legacy top-N."""
        if skip > 0 or take > 0:
            return cls(offset=max(skip, 0), limit=take if take > 0 else None)
        if top_n > 0:
            return cls(limit=top_n)
        return cls()

    def apply(self, items: List[Any]) -> List[Any]:
        window = items[self.offset:]
        if self.limit is not None:
            window = window[:self.limit]
        return window


class QueryStatus(Enum):
    """How a query call ended"""
    OK = "ok"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CacheOutcome(Enum):
    HIT = "hit"
    MISS = "miss"
    BYPASS = "bypass"
    DISABLED = "disabled"


@dataclass(frozen=True)
class QueryOutcome:
    """Result of a dynamic content query plus its diagnostics.

    items is always a list; status tells "genuinely empty" apart from
    "failed and empty".
    """
    items: List[Dict[str, Any]]
    status: QueryStatus = QueryStatus.OK
    cache: CacheOutcome = CacheOutcome.DISABLED
    cache_key: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status is QueryStatus.OK

    @property
    def total(self) -> int:
        return len(self.items)
