"""Tests for StartupManager wiring."""


import pytest

from app_state import AppState
from config import AuthConfig, CacheConfig, ChannelConfig, Config, ContentConfig, QueryConfig
from operations.query_executor import DynamicContentExecutor
from models import DynamicContentRequest
from startup.config_validator import ConfigValidationError
from startup.manager import StartupManager


def sample_config(data_dir, **cache):
    return Config(
        channel=ChannelConfig(name="website"),
        query=QueryConfig(timeout_seconds=2.0),
        cache=CacheConfig(**cache),
        content=ContentConfig(
            seed_path=data_dir / "content.yaml",
            content_types_path=data_dir / "content_types.yaml"
        ),
        auth=AuthConfig()
    )


class TestStartupManager:

    @pytest.mark.asyncio
    async def test_initializes_components(self, data_dir):
        state = AppState()
        await StartupManager(state, sample_config(data_dir)).initialize()

        assert state.content_item_count() > 0
        assert len(state.get_registry()) >= 2
        assert state.get_channel().invalidation_tag == "node|website|all"
        assert isinstance(state.get_executor(), DynamicContentExecutor)
        assert state.get_executor().guard.timeout_seconds == 2.0
        assert state.get_query_cache() is not None
        assert state.get_article_repository().content_type == "DancingGoat.ArticlePage"

    @pytest.mark.asyncio
    async def test_seeded_news_query(self, data_dir):
        state = AppState()
        await StartupManager(state, sample_config(data_dir)).initialize()

        request = DynamicContentRequest(path="/News", content_type="Article", order_by="PublishDate DESC", take=3)
        items = await state.get_executor().query_dynamic_content(request)

        assert [item["WebPageItemName"] for item in items] == ["item4", "item3", "item2"]
        assert items[0]["Views"] == 410

    @pytest.mark.asyncio
    async def test_cache_disabled(self, data_dir):
        state = AppState()
        await StartupManager(state, sample_config(data_dir, enabled=False)).initialize()

        assert state.get_query_cache() is None
        assert state.get_executor().cache is None
        assert state.cached_entry_count() == 0

    @pytest.mark.asyncio
    async def test_missing_content_starts_empty(self, tmp_path):
        state = AppState()
        await StartupManager(state, sample_config(tmp_path)).initialize()

        assert state.content_item_count() == 0
        assert len(state.get_registry()) == 0

    @pytest.mark.asyncio
    async def test_invalid_config_aborts(self, data_dir):
        config = sample_config(data_dir, max_size=-1)
        with pytest.raises(ConfigValidationError):
            await StartupManager(AppState(), config).initialize()
