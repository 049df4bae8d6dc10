import time

from asyncpg import PostgresError
from heliclockter import datetime_utc

from tcgleague.config import config
from tcgleague.models.db.news import NewsArticle, NewsArticleInsertable
from tcgleague.models.news import NewsArticleBody
from tcgleague.sql.news import get_news_articles, sql_create_news_article
from tcgleague.utils.logging import logger

NEWS_FEED_SIZE = 50

_NEWS_CACHE: tuple[float, list[NewsArticle]] | None = None


def clear_news_cache() -> None:
    global _NEWS_CACHE
    _NEWS_CACHE = None


async def get_news_feed() -> list[NewsArticle]:
    """
    Latest articles, newest first, cached for `config.news_cache_ttl_s` seconds.

    When the database cannot be reached, a stale feed is served if there is one.
    """
    global _NEWS_CACHE
    now = time.monotonic()
    if _NEWS_CACHE is not None and now - _NEWS_CACHE[0] < config.news_cache_ttl_s:
        return _NEWS_CACHE[1]

    try:
        articles = await get_news_articles(NEWS_FEED_SIZE)
    except (PostgresError, OSError) as exc:
        if _NEWS_CACHE is None:
            raise
        logger.warning(f"Serving stale news feed, could not load articles: {exc}")
        return _NEWS_CACHE[1]

    _NEWS_CACHE = (now, articles)
    return articles


async def get_news(
    limit: int = 10, *, category: str | None = None, search: str | None = None
) -> list[NewsArticle]:
    articles = await get_news_feed()
    if category is not None and category.strip():
        articles = [
            article
            for article in articles
            if article.category.lower() == category.strip().lower()
        ]
    if search is not None and search.strip():
        articles = [article for article in articles if article.matches(search)]
    return articles[:limit]


async def publish_news_article(body: NewsArticleBody) -> NewsArticle:
    article = await sql_create_news_article(
        NewsArticleInsertable(
            title=body.title.strip(),
            excerpt=body.excerpt,
            content=body.content,
            image_url=body.image_url,
            author=body.author,
            published_at=body.published_at or datetime_utc.now(),
            source=body.source,
            source_url=body.source_url,
            category=body.category.strip(),
            tags=body.tags,
            is_official=body.is_official,
        )
    )
    clear_news_cache()
    return article
