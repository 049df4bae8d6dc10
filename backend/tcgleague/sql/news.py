import json

from tcgleague.database import database
from tcgleague.models.db.news import NewsArticle, NewsArticleInsertable
from tcgleague.utils.types import assert_some


async def get_news_articles(limit: int) -> list[NewsArticle]:
    query = """
        SELECT *
        FROM news_articles
        ORDER BY published_at DESC, id DESC
        LIMIT :limit
        """
    result = await database.fetch_all(query=query, values={"limit": limit})
    return [NewsArticle.model_validate(dict(row._mapping)) for row in result]


async def sql_create_news_article(article: NewsArticleInsertable) -> NewsArticle:
    query = """
        INSERT INTO news_articles (
            title,
            excerpt,
            content,
            image_url,
            author,
            published_at,
            source,
            source_url,
            category,
            tags,
            is_official
        )
        VALUES (
            :title,
            :excerpt,
            :content,
            :image_url,
            :author,
            :published_at,
            :source,
            :source_url,
            :category,
            CAST(:tags AS json),
            :is_official
        )
        RETURNING *
        """
    values = article.model_dump()
    values["tags"] = json.dumps(article.tags)
    result = await database.fetch_one(query=query, values=values)
    return NewsArticle.model_validate(dict(assert_some(result)._mapping))
