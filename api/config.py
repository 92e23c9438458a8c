"""
Configuration constants for the dynamic content query API
"""
from pathlib import Path
from dataclasses import dataclass

# Fallback locale when a request omits its language
DEFAULT_LANGUAGE = "en"

# Channel root path; queries at the root carry no path restriction
ROOT_PATH = "/"

# Scope mode values accepted from callers
SCOPE_ALL_CHILD_PAGES = "All child pages"
SCOPE_ONLY_THIS_PAGE = "Only this page"

@dataclass
class ChannelConfig:
    """Active website channel context"""
    name: str = "website"
    preview: bool = False  # Preview mode also exposes secured items

@dataclass
class QueryConfig:
    """Dynamic content query configuration"""
    default_language: str = DEFAULT_LANGUAGE
    timeout_seconds: float = 5.0  # Deadline for every execution engine call

@dataclass
class CacheConfig:
    """Query cache configuration"""
    enabled: bool = True
    max_size: int = 100
    ttl_seconds: float = 300.0  # 5 minutes
    single_flight: bool = False  # De-duplicate concurrent misses on the same key

@dataclass
class ContentConfig:
    """Content store seed and schema locations"""
    seed_path: Path = Path("/app/data/content.yaml")
    content_types_path: Path = Path("/app/data/content_types.yaml")
    article_content_type: str = "DancingGoat.ArticlePage"

@dataclass
class AuthConfig:
    """API key authentication (disabled by default)"""
    enabled: bool = False
    header_name: str = "X-API-Key"
    api_key: str = ""
    protected_prefix: str = "/content"

@dataclass
class Config:
    """Main configuration container"""
    channel: ChannelConfig
    query: QueryConfig
    cache: CacheConfig
    content: ContentConfig
    auth: AuthConfig

    @classmethod
    def from_env(cls) -> 'Config':
        """Create config from environment - delegates to EnvironmentConfigLoader"""
        from environment_config_loader import EnvironmentConfigLoader
        return EnvironmentConfigLoader().load()

# Default instance
default_config = Config.from_env()
