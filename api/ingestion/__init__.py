"""
Ingestion package - content loading and storage.

This package provides the content side of the query engine:
- Seed loading from YAML (ContentSeedLoader)
- In-memory execution engine (InMemoryContentStore)

Usage:
    from ingestion import ContentSeedLoader, InMemoryContentStore
    store = InMemoryContentStore(ContentSeedLoader().load(path))
"""

from .content_loader import ContentSeedError, ContentSeedLoader
from .content_store import InMemoryContentStore

__all__ = [
    'ContentSeedError',
    'ContentSeedLoader',
    'InMemoryContentStore',
]
