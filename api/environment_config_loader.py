"""
Environment configuration loader.

Logic for reading environment variables lives with the data source
(environment) rather than in the Config dataclasses.
"""
import os
from pathlib import Path
from config import (
    Config, ChannelConfig, QueryConfig, CacheConfig, ContentConfig, AuthConfig
)

class EnvironmentConfigLoader:
    """Loads configuration from environment variables.

    Single Responsibility: Environment access logic.
    """

    def load(self) -> Config:
        """Create Config from environment variables"""
        return Config(
            channel=self._load_channel_config(),
            query=self._load_query_config(),
            cache=self._load_cache_config(),
            content=self._load_content_config(),
            auth=self._load_auth_config()
        )

    def _load_channel_config(self) -> ChannelConfig:
        """Load website channel context from environment"""
        return ChannelConfig(
            name=self._get_optional("CHANNEL_NAME", ChannelConfig.name),
            preview=self._get_bool("CHANNEL_PREVIEW", False)
        )

    def _load_query_config(self) -> QueryConfig:
        """Load query configuration from environment"""
        return QueryConfig(
            default_language=self._get_optional("DEFAULT_LANGUAGE", QueryConfig.default_language),
            timeout_seconds=self._get_float("QUERY_TIMEOUT_SECONDS", QueryConfig.timeout_seconds)
        )

    def _load_cache_config(self) -> CacheConfig:
        """Load cache configuration from environment"""
        return CacheConfig(
            enabled=self._get_bool("CACHE_ENABLED", True),
            max_size=self._get_int("CACHE_MAX_SIZE", 100),
            ttl_seconds=self._get_float("CACHE_TTL_SECONDS", 300.0),
            single_flight=self._get_bool("CACHE_SINGLE_FLIGHT", False)
        )

    def _load_content_config(self) -> ContentConfig:
        """Load content store locations from environment"""
        return ContentConfig(
            seed_path=Path(self._get_optional("CONTENT_SEED_PATH", str(ContentConfig.seed_path))),
            content_types_path=Path(
                self._get_optional("CONTENT_TYPES_PATH", str(ContentConfig.content_types_path))
            ),
            article_content_type=self._get_optional(
                "ARTICLE_CONTENT_TYPE", ContentConfig.article_content_type
            )
        )

    def _load_auth_config(self) -> AuthConfig:
        """Load API key authentication settings from environment"""
        return AuthConfig(
            enabled=self._get_bool("API_KEY_AUTH_ENABLED", False),
            header_name=self._get_optional("API_KEY_HEADER", AuthConfig.header_name),
            api_key=self._get_optional("API_KEY", ""),
            protected_prefix=self._get_optional("API_KEY_PROTECTED_PREFIX", AuthConfig.protected_prefix)
        )

    def _get_optional(self, key: str, default: str) -> str:
        """Get optional string environment variable"""
        return os.getenv(key, default)

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable"""
        value = os.getenv(key, str(default).lower())
        return value.lower() == "true"

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable"""
        value = os.getenv(key, str(default))
        return int(value)

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable"""
        value = os.getenv(key, str(default))
        return float(value)
