"""Tests for the in-memory content store."""

import pytest

from conftest import make_page, make_record
from domain_models import ExecutionOptions
from ingestion import InMemoryContentStore
from pipeline.query_builder import ContentQuery
from pipeline.timeout_guard import CancellationToken, QueryCancelledError
from value_objects import OrderSpec, Pagination, Predicate, ScopeFilter, SortDirection

LIVE = ExecutionOptions()
PREVIEW = ExecutionOptions(for_preview=True, include_secured_items=True)


def article_query(**overrides):
    params = dict(language="en", content_type="Article", channel="website", scope=ScopeFilter.subtree("/News"))
    params.update(overrides)
    return ContentQuery(**params)


def ids(records):
    return [record.page.id for record in records]


class TestScope:

    @pytest.mark.asyncio
    async def test_subtree_includes_nested(self, store):
        records = await store.run(article_query(), LIVE)
        assert sorted(ids(records)) == [11, 12, 13, 14, 15]

    @pytest.mark.asyncio
    async def test_children_only(self, store):
        records = await store.run(article_query(scope=ScopeFilter.children("/News")), LIVE)
        assert sorted(ids(records)) == [11, 12, 13, 14]

    @pytest.mark.asyncio
    async def test_single_page(self, store):
        records = await store.run(article_query(scope=ScopeFilter.single("/News/item1")), LIVE)
        assert ids(records) == [11]

    @pytest.mark.asyncio
    async def test_subtree_does_not_match_sibling_prefix(self):
        store = InMemoryContentStore([
            make_record("Article", {}, make_page(1, "/News/item1")),
            make_record("Article", {}, make_page(2, "/Newsletter/item")),
        ])
        records = await store.run(article_query(), LIVE)
        assert ids(records) == [1]


class TestFiltering:

    @pytest.mark.asyncio
    async def test_language(self, store):
        records = await store.run(article_query(language="de"), LIVE)
        assert ids(records) == [17]

    @pytest.mark.asyncio
    async def test_drafts_only_in_preview(self, store):
        live = await store.run(article_query(), LIVE)
        preview = await store.run(article_query(), PREVIEW)
        assert 16 not in ids(live)
        assert 16 in ids(preview)

    @pytest.mark.asyncio
    async def test_secured_items_need_permission(self):
        store = InMemoryContentStore([make_record("Article", {}, make_page(1, "/News/a"), secured=True)])
        assert await store.run(article_query(), LIVE) == []
        assert len(await store.run(article_query(), PREVIEW)) == 1

    @pytest.mark.asyncio
    async def test_channel_queries_skip_non_page_records(self):
        store = InMemoryContentStore([
            make_record("Article", {"Title": "page"}, make_page(1, "/a")),
            make_record("Article", {"Title": "reusable"}),
        ])
        records = await store.run(article_query(scope=ScopeFilter.none()), LIVE)
        assert [record.fields["Title"] for record in records] == ["page"]

    @pytest.mark.asyncio
    async def test_untyped_query_filters_language_only(self, store):
        records = await store.run(ContentQuery(language="en"), LIVE)
        assert len(records) == 6

    @pytest.mark.asyncio
    async def test_equals_predicate(self, store):
        query = article_query(predicates=(Predicate.equals("Views", "340"),))
        assert ids(await store.run(query, LIVE)) == [12]

    @pytest.mark.asyncio
    async def test_contains_is_case_insensitive(self, store):
        query = article_query(predicates=(Predicate.contains("Title", "BREW"),))
        assert ids(await store.run(query, LIVE)) == [14]

    @pytest.mark.asyncio
    async def test_predicate_on_identity_field(self, store):
        query = article_query(predicates=(Predicate.equals("WebPageItemName", "item3"),))
        assert ids(await store.run(query, LIVE)) == [13]

    @pytest.mark.asyncio
    async def test_predicate_on_missing_field(self, store):
        query = article_query(predicates=(Predicate.equals("Author", "x"),))
        assert await store.run(query, LIVE) == []


class TestOrderingAndPaging:

    @pytest.mark.asyncio
    async def test_order_descending(self, store):
        query = article_query(order=OrderSpec("PublishDate", SortDirection.DESCENDING))
        assert ids(await store.run(query, LIVE)) == [14, 13, 12, 11, 15]

    @pytest.mark.asyncio
    async def test_numeric_order(self, store):
        query = article_query(order=OrderSpec("Views"))
        assert ids(await store.run(query, LIVE)) == [15, 13, 11, 12, 14]

    @pytest.mark.asyncio
    async def test_missing_values_sort_last(self):
        store = InMemoryContentStore([
            make_record("Article", {}, make_page(1, "/News/a")),
            make_record("Article", {"Views": 5}, make_page(2, "/News/b")),
        ])
        query = article_query(order=OrderSpec("Views", SortDirection.DESCENDING))
        assert ids(await store.run(query, LIVE)) == [2, 1]

    @pytest.mark.asyncio
    async def test_pagination_after_ordering(self, store):
        query = article_query(order=OrderSpec("PublishDate", SortDirection.DESCENDING),
                              pagination=Pagination(offset=1, limit=2))
        assert ids(await store.run(query, LIVE)) == [13, 12]


class TestCancellation:

    @pytest.mark.asyncio
    async def test_cancelled_token_stops_query(self, store):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(QueryCancelledError):
            await store.run(article_query(), LIVE, token)

    def test_len(self, store, news_records):
        assert len(store) == len(news_records)
