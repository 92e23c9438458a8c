"""Startup manager - orchestrates application initialization."""
from config import default_config
from app_state import AppState
from startup.component_factory import ComponentFactory
from startup.config_validator import ConfigValidator


class StartupManager:
    """Manages application startup.

    Phases run in order:
    - Configuration: validate config
    - Content: channel, schema registry, content store
    - Query: cache, article repository, executor
    """

    def __init__(self, app_state: AppState, config=None):
        self.state = app_state
        self.config = config or default_config
        self.factory = ComponentFactory(self.config)

    async def initialize(self):
        """Initialize all components"""
        print("Initializing dynamic content service...")
        self._validate_config()
        self._init_content()
        self._init_cache()
        self._init_executor()
        print("Dynamic content service ready!")

    # ============ Configuration Phase ============

    def _validate_config(self):
        """Validate configuration before startup"""
        validator = ConfigValidator(self.config)
        validator.validate()
        print("Configuration validated")

    # ============ Content Phase ============

    def _init_content(self):
        """Initialize channel context, schema registry and content store"""
        core = self.state.core
        core.channel = self.factory.create_channel()
        mode = "preview" if core.channel.is_preview else "live"
        print(f"Channel: {core.channel.name} ({mode})")

        core.registry = self.factory.create_registry()
        print(f"Content type registry loaded ({len(core.registry)} types)")

        core.engine = self.factory.create_engine()
        print(f"Content store ready ({len(core.engine)} items)")

    # ============ Query Phase ============

    def _init_cache(self):
        """Initialize query cache"""
        self.state.query.cache = self.factory.create_query_cache()
        cache = self.config.cache
        if self.state.query.cache is None:
            print("Query cache disabled")
            return
        flight = ", single-flight" if cache.single_flight else ""
        print(f"Query cache enabled (size: {cache.max_size}, ttl: {cache.ttl_seconds}s{flight})")

    def _init_executor(self):
        """Initialize article repository and dynamic content executor"""
        core, query = self.state.core, self.state.query
        query.article_repository = self.factory.create_article_repository(core.engine)
        query.executor = self.factory.create_executor(
            core.engine, core.channel, core.registry, query.cache, query.article_repository
        )
        print(f"Query executor ready (timeout: {self.config.query.timeout_seconds}s)")
