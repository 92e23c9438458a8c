"""
Tests for configuration validator
"""
from dataclasses import replace
from pathlib import Path

import pytest

from config import AuthConfig, CacheConfig, ChannelConfig, Config, ContentConfig, QueryConfig
from startup.config_validator import ConfigValidator, ConfigValidationError


def make_config(tmp_path, **sections):
    seed = tmp_path / "content.yaml"
    types = tmp_path / "content_types.yaml"
    seed.write_text("items: []\n")
    types.write_text("content_types: {}\n")
    config = Config(
        channel=ChannelConfig(),
        query=QueryConfig(),
        cache=CacheConfig(),
        content=ContentConfig(seed_path=seed, content_types_path=types),
        auth=AuthConfig()
    )
    return replace(config, **sections)


def test_valid_config_passes(tmp_path):
    """Test that valid configuration passes validation"""
    validator = ConfigValidator(make_config(tmp_path))
    # Should not raise
    validator.validate()
    assert validator.warnings == []


def test_non_positive_timeout_fails(tmp_path):
    config = make_config(tmp_path, query=QueryConfig(timeout_seconds=0))

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigValidator(config).validate()

    assert "QUERY_TIMEOUT_SECONDS" in str(exc_info.value)


def test_negative_cache_settings_fail(tmp_path):
    config = make_config(tmp_path, cache=CacheConfig(max_size=-1, ttl_seconds=-5))

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigValidator(config).validate()

    message = str(exc_info.value)
    assert "CACHE_MAX_SIZE" in message
    assert "CACHE_TTL_SECONDS" in message


def test_auth_without_key_fails(tmp_path):
    config = make_config(tmp_path, auth=AuthConfig(enabled=True))

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigValidator(config).validate()

    assert "API_KEY" in str(exc_info.value)


def test_empty_channel_fails(tmp_path):
    with pytest.raises(ConfigValidationError):
        ConfigValidator(make_config(tmp_path, channel=ChannelConfig(name=" "))).validate()


def test_missing_seed_only_warns(tmp_path, capsys):
    config = make_config(tmp_path, content=ContentConfig(
        seed_path=tmp_path / "missing.yaml",
        content_types_path=Path(tmp_path / "missing_types.yaml")
    ))

    validator = ConfigValidator(config)
    validator.validate()

    assert len(validator.warnings) == 2
    assert "Content seed file not found" in capsys.readouterr().out
