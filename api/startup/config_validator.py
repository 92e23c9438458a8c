"""
Configuration validator for startup checks.

Validates configuration settings early to provide clear error messages
before the application starts answering queries with bad settings.
"""
from typing import List


class ConfigValidationError(Exception):
    """Configuration validation failed"""
    pass


class ConfigValidator:
    """Validates configuration settings on startup"""

    def __init__(self, config):
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self) -> None:
        """Validate all configuration settings

        Raises:
            ConfigValidationError: If validation fails
        """
        self._validate_channel()
        self._validate_query()
        self._validate_cache()
        self._validate_auth()
        self._check_seed_files()

        for warning in self.warnings:
            print(f"Warning: {warning}")

        if self.errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(
                f"  - {error}" for error in self.errors
            )
            raise ConfigValidationError(error_msg)

    def _validate_channel(self) -> None:
        if not self.config.channel.name.strip():
            self.errors.append(
                "Channel name is empty\n"
                "    Set CHANNEL_NAME in .env"
            )

    def _validate_query(self) -> None:
        timeout = self.config.query.timeout_seconds
        if timeout <= 0:
            self.errors.append(
                f"Query timeout must be positive, got {timeout}\n"
                f"    Update QUERY_TIMEOUT_SECONDS in .env"
            )
        if not self.config.query.default_language.strip():
            self.errors.append(
                "Default language is empty\n"
                "    Set DEFAULT_LANGUAGE in .env"
            )

    def _validate_cache(self) -> None:
        cache = self.config.cache
        if cache.max_size < 0:
            self.errors.append(
                f"Cache size cannot be negative, got {cache.max_size}\n"
                f"    Update CACHE_MAX_SIZE in .env"
            )
        if cache.ttl_seconds < 0:
            self.errors.append(
                f"Cache TTL cannot be negative, got {cache.ttl_seconds}\n"
                f"    Update CACHE_TTL_SECONDS in .env"
            )

    def _validate_auth(self) -> None:
        auth = self.config.auth
        if auth.enabled and not auth.api_key:
            self.errors.append(
                "API key authentication is enabled but no key is configured\n"
                "    Set API_KEY in .env or disable API_KEY_AUTH_ENABLED"
            )

    def _check_seed_files(self) -> None:
        """Missing content files only warn, the service starts empty"""
        content = self.config.content
        if not content.seed_path.exists():
            self.warnings.append(f"Content seed file not found: {content.seed_path}")
        if not content.content_types_path.exists():
            self.warnings.append(f"Content type file not found: {content.content_types_path}")
