"""Component factory for creating application objects"""

from domain_models import ChannelContext
from ingestion import ContentSeedLoader, InMemoryContentStore
from operations.article_repository import ArticleRepository
from operations.query_executor import DynamicContentExecutor
from pipeline import ContentQueryBuilder, ContentTypeRegistry, ResultNormalizer, TimeoutGuard
from query_cache import QueryCache


class ComponentFactory:
    """Creates application components

    Design principles:
    - Single responsibility: object creation
    - Small methods
    - Dependency injection pattern
    """

    def __init__(self, config):
        self.config = config

    def create_channel(self) -> ChannelContext:
        """Create the active channel context"""
        return ChannelContext.from_config(self.config.channel)

    def create_registry(self) -> ContentTypeRegistry:
        """Load content type schemas (empty registry if the file is missing)"""
        return ContentTypeRegistry.load(self.config.content.content_types_path)

    def create_engine(self) -> InMemoryContentStore:
        """Create content store seeded from the content file if present"""
        seed_path = self.config.content.seed_path
        if not seed_path.exists():
            return InMemoryContentStore()
        loader = ContentSeedLoader(self.config.channel.name, self.config.query.default_language)
        return InMemoryContentStore(loader.load(seed_path))

    def create_query_cache(self):
        """Create query cache if enabled"""
        cache = self.config.cache
        if not cache.enabled:
            return None
        return QueryCache(cache.max_size, cache.ttl_seconds, single_flight=cache.single_flight)

    def create_article_repository(self, engine) -> ArticleRepository:
        return ArticleRepository(engine, self.config.channel.name, self.config.content.article_content_type)

    def create_executor(self, engine, channel, registry, cache, article_repository=None) -> DynamicContentExecutor:
        """Create dynamic content executor"""
        return DynamicContentExecutor(
            engine=engine,
            channel=channel,
            cache=cache,
            normalizer=ResultNormalizer(registry),
            builder=ContentQueryBuilder(),
            guard=TimeoutGuard(self.config.query.timeout_seconds),
            default_language=self.config.query.default_language,
            cache_ttl=self.config.cache.ttl_seconds,
            article_repository=article_repository
        )
