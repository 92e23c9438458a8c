"""Interfaces for the dynamic content query pipeline.

Provides abstract base classes for the collaborators the executor depends on:
- ContentQueryEngine: Runs structured queries against a content store
- CacheService: Tag-aware result cache

Depend on abstractions, not concretions.
"""

from pipeline.interfaces.content_engine import ContentQueryEngine
from pipeline.interfaces.cache import CacheService

__all__ = [
    'ContentQueryEngine',
    'CacheService',
]
