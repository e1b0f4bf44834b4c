"""
News service - articles for the public news pages and the admin editor.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID
from core.domain.models import NewsArticle, NewsCreate
from core.domain.constants import ALL_FILTER, FEATURED_NEWS_LIMIT
from core.interfaces.repositories import INewsRepository
from core.utils.query_cache import QueryCache

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _aware(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def display_date(article: NewsArticle) -> Optional[datetime]:
    """publish_date, or created_at for drafts and legacy rows"""
    return article.publish_date or article.created_at


class NewsService:
    """Service for news articles"""

    def __init__(self, news_repo: INewsRepository, cache: QueryCache):
        self.news_repo = news_repo
        self.cache = cache

    async def list_articles(self) -> List[NewsArticle]:
        """Every article, drafts included (admin)"""
        return await self.cache.fetch(("news",), self.news_repo.get_all)

    async def list_published(self, category: str = ALL_FILTER) -> List[NewsArticle]:
        articles = [a for a in await self.list_articles() if a.is_published]
        return self.filter_by_category(self.sort_newest(articles), category)

    async def featured(self) -> List[NewsArticle]:
        return (await self.list_published())[:FEATURED_NEWS_LIMIT]

    async def get_article(self, article_id: UUID) -> Optional[NewsArticle]:
        return await self.cache.fetch(
            ("news", str(article_id)),
            lambda: self.news_repo.get_by_id(article_id),
        )

    async def get_published(self, article_id: UUID) -> Optional[NewsArticle]:
        article = await self.get_article(article_id)
        return article if article and article.is_published else None

    @staticmethod
    def prepare(
        title: str,
        content: str,
        summary: str = "",
        category: Optional[str] = None,
        featured_image_url: Optional[str] = None,
        is_published: bool = False,
        publish_date: Optional[datetime] = None,
        created_by: Optional[str] = None,
    ) -> NewsCreate:
        """Form values -> stored shape: drafts carry no publish date, category lives in tags"""
        if is_published:
            publish_date = publish_date or datetime.now(timezone.utc)
        else:
            publish_date = None
        return NewsCreate(
            title=title,
            content=content,
            summary=summary or "",
            featured_image_url=featured_image_url or None,
            is_published=is_published,
            publish_date=publish_date,
            tags=[category] if category else [],
            created_by=created_by,
        )

    async def create_article(self, article_data: NewsCreate) -> NewsArticle:
        article = await self.news_repo.create(article_data)
        self.cache.invalidate("news")
        logger.info(f"[NEWS] Created '{article.title}' ({article.id}), published={article.is_published}")
        return article

    async def update_article(self, article_id: UUID, article_data: NewsCreate) -> Optional[NewsArticle]:
        update_dict = article_data.model_dump(mode="json", exclude={"created_by"})
        article = await self.news_repo.update(article_id, update_dict)
        self.cache.invalidate("news")
        return article

    async def delete_article(self, article_id: UUID) -> None:
        await self.news_repo.delete(article_id)
        self.cache.invalidate("news")
        logger.info(f"[NEWS] Deleted {article_id}")

    @staticmethod
    def sort_newest(articles: List[NewsArticle]) -> List[NewsArticle]:
        return sorted(articles, key=lambda a: _aware(display_date(a)), reverse=True)

    @staticmethod
    def filter_by_category(articles: List[NewsArticle], category: str = ALL_FILTER) -> List[NewsArticle]:
        if not category or category == ALL_FILTER:
            return list(articles)
        return [a for a in articles if category in a.tags]
