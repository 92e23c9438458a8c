"""
Application state container

Composes focused state objects and exposes delegation methods so route
handlers never reach through the internal structure.
"""


class CoreServices:
    """Core service dependencies

    Holds the content side of the application: the execution engine that
    answers structured queries and the content type registry used to
    project results.
    """

    def __init__(self):
        self.engine = None
        self.registry = None
        self.channel = None


class QueryServices:
    """Query-related services

    Separated from CoreServices to maintain SRP.
    """

    def __init__(self):
        self.cache = None
        self.executor = None
        self.article_repository = None


class AppState:
    """Application state container

    Delegation methods hide internal structure (Law of Demeter).
    """

    def __init__(self):
        self.core = CoreServices()
        self.query = QueryServices()

    # === Service Access Delegation (for route handlers) ===

    def get_engine(self):
        """Get content query engine"""
        return self.core.engine

    def get_registry(self):
        """Get content type registry"""
        return self.core.registry

    def get_channel(self):
        """Get channel context"""
        return self.core.channel

    def get_query_cache(self):
        """Get query cache"""
        return self.query.cache

    def get_executor(self):
        """Get dynamic content executor"""
        return self.query.executor

    def get_article_repository(self):
        """Get article repository"""
        return self.query.article_repository

    # === State Access Delegation ===

    def content_item_count(self) -> int:
        """Number of records held by the engine, 0 if it can't tell"""
        engine = self.core.engine
        if engine is None:
            return 0
        try:
            return len(engine)
        except TypeError:
            return 0

    def cached_entry_count(self) -> int:
        if self.query.cache is None:
            return 0
        return len(self.query.cache)

    # === Lifecycle Management Delegation ===

    def clear_cache(self):
        """Clear all cached query results"""
        if self.query.cache is not None:
            self.query.cache.clear()
