import logging
from typing import List, Optional

from config import ROOT_PATH
from domain_models import ContentRecord, ExecutionOptions
from models import ArticlePageModel, format_date
from pipeline.query_builder import ContentQuery
from pipeline.scope_resolver import normalize_path
from value_objects import OrderSpec, Pagination, ScopeFilter, SortDirection

logger = logging.getLogger(__name__)


class ArticleRepository:
    """Reads article pages of one channel through a content query engine"""

    def __init__(self, engine, channel: str, content_type: str = "DancingGoat.ArticlePage"):
        self.engine = engine
        self.channel = channel
        self.content_type = content_type

    async def get_article_pages(self, path: str, language: str, for_preview: bool = False,
                                top_n: int = 0) -> List[ContentRecord]:
        """Articles under path, newest first"""
        path = normalize_path(path)
        query = ContentQuery(
            language=language,
            content_type=self.content_type,
            channel=self.channel,
            scope=ScopeFilter.none() if path == ROOT_PATH else ScopeFilter.subtree(path),
            order=OrderSpec("ArticlePagePublishDate", SortDirection.DESCENDING),
            pagination=Pagination(limit=top_n if top_n > 0 else None)
        )
        options = ExecutionOptions(for_preview=for_preview, include_secured_items=for_preview)
        return await self.engine.run(query, options)

    async def get_article_page(self, article_id: int, language: str) -> Optional[ContentRecord]:
        pages = await self.get_article_pages(ROOT_PATH, language)
        return next((page for page in pages if page.page.id == article_id), None)

    async def get_articles(self, path: str, language: str) -> List[ArticlePageModel]:
        """Articles under path, retrying at the channel root when none are found"""
        logger.info(f"Getting articles from path: {path}, language: {language}")
        articles = await self.get_article_pages(path, language, for_preview=True)
        if not articles:
            logger.warning(f"No articles found at path: {path}, trying root path")
            articles = await self.get_article_pages(ROOT_PATH, language, for_preview=True)
            if not articles:
                logger.warning("No articles found at root path either")
                return []

        logger.info(f"Found {len(articles)} articles")
        return [self.to_model(article) for article in articles]

    async def get_article_by_id(self, article_id: str, language: str) -> ArticlePageModel:
        """Single article; an empty model for malformed or unknown ids"""
        try:
            numeric_id = int(article_id)
        except (TypeError, ValueError):
            logger.warning(f"Invalid article ID format: {article_id}")
            return ArticlePageModel()

        article = await self.get_article_page(numeric_id, language)
        if article is None:
            logger.warning(f"Article with ID {numeric_id} not found")
            return ArticlePageModel()
        return self.to_model(article)

    @staticmethod
    def to_model(article: ContentRecord) -> ArticlePageModel:
        fields = article.fields
        article_id = str(article.page.id)
        try:
            return ArticlePageModel(
                id=article_id,
                title=fields.get("ArticleTitle"),
                summary=fields.get("ArticlePageSummary"),
                text=fields.get("ArticlePageText"),
                publish_date=format_date(fields.get("ArticlePagePublishDate")),
                teaser=_teaser_url(fields.get("ArticlePageTeaser")),
                url=f"/articles/{article_id}"
            )
        except Exception as e:
            logger.error(f"Error mapping article to model: {e}")
            return ArticlePageModel(id=article_id, title=_text_or_none(fields.get("ArticleTitle")))


def _teaser_url(teaser) -> Optional[str]:
    """First teaser image URL; teasers are a list of assets, an asset, or a URL"""
    if isinstance(teaser, list):
        teaser = teaser[0] if teaser else None
    if isinstance(teaser, dict):
        return teaser.get("url")
    return teaser


def _text_or_none(value) -> Optional[str]:
    return value if isinstance(value, str) else None
