from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from config import ROOT_PATH, SCOPE_ALL_CHILD_PAGES


class DynamicContentRequest(BaseModel):
    """Loosely-typed dynamic content query parameters.

    Accepts both snake_case and the camelCase names GraphQL clients send.
    """
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(default=ROOT_PATH, description="Path to start the content search from")
    language: Optional[str] = Field(default=None, description="Language code, defaults to the configured locale")
    type_content_path: str = Field(
        default=SCOPE_ALL_CHILD_PAGES, alias="typeContentPath",
        description="'All child pages' or 'Only this page'"
    )
    content_type: Optional[str] = Field(default=None, alias="contentType", description="Content type to filter by")
    maximum_nesting_level: int = Field(
        default=-1, alias="maximumNestingLevel",
        description="Positive values restrict results to direct children"
    )
    order_by: Optional[str] = Field(default=None, alias="orderBy", description="Ordering, e.g. 'PublishDate DESC'")
    select_top_n_pages: int = Field(default=0, alias="selectTopNPages", description="Legacy maximum item count")
    where_condition: Optional[str] = Field(
        default=None, alias="whereCondition", description="Single filter clause, e.g. Title=\"Intro\""
    )
    skip: int = Field(default=0, description="Number of items to skip")
    take: int = Field(default=0, description="Number of items to take")
    cache_key: Optional[str] = Field(default=None, alias="cacheKey", description="Explicit cache key override")
    bypass_cache: bool = Field(default=False, alias="bypassCache", description="Skip the cache entirely")


class DynamicContentResponse(BaseModel):
    items: List[Dict[str, Any]]
    total_results: int
    status: str
    cache: str
    cache_key: Optional[str] = None
    diagnostics: List[str] = []


def _coerce(value, target):
    """Best-effort conversion; None when the value can't be converted"""
    if value is None:
        return None
    try:
        if target is str:
            return value if isinstance(value, str) else str(value)
        if target is int and isinstance(value, bool):
            return None
        return target(value)
    except (TypeError, ValueError):
        return None


_INTEGER_ITEM_FIELDS = {"WebPageItemID", "WebPageItemLevel"}


def format_date(value) -> Optional[str]:
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).strftime("%Y-%m-%d")
        except ValueError:
            return None
    return None


class DynamicContentItem(BaseModel):
    """Typed projection of a normalized item for front-end consumers"""
    WebPageItemID: Optional[int] = None
    WebPageItemGUID: Optional[str] = None
    WebPageItemName: Optional[str] = None
    WebPageItemTreePath: Optional[str] = None
    WebPageItemLevel: Optional[int] = None
    ArticleTitle: Optional[str] = None
    ArticlePageText: Optional[str] = None
    ArticlePageSummary: Optional[str] = None
    ArticlePagePublishDate: Optional[str] = None
    Title: Optional[str] = None
    Subtitle: Optional[str] = None
    Content: Optional[str] = None
    Image: Optional[str] = None

    @classmethod
    def from_fields(cls, data: Optional[Dict[str, Any]]) -> 'DynamicContentItem':
        data = data or {}
        values = {}
        for name in cls.model_fields:
            if name == "ArticlePagePublishDate":
                values[name] = format_date(data.get(name))
                continue
            target = int if name in _INTEGER_ITEM_FIELDS else str
            values[name] = _coerce(data.get(name), target)
        return cls(**values)


class ArticlePageModel(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    text: Optional[str] = None
    publish_date: Optional[str] = None
    teaser: Optional[str] = None
    url: Optional[str] = None


class CacheInvalidationRequest(BaseModel):
    tag: Optional[str] = Field(default=None, description="Invalidation tag, e.g. node|website|all")
    key: Optional[str] = Field(default=None, description="Single cache key to drop")


class CacheInvalidationResponse(BaseModel):
    invalidated: int


class HealthResponse(BaseModel):
    status: str
    channel: str
    preview: bool
    content_items: int
    cache_enabled: bool
    cached_entries: int
