from fastapi import APIRouter, Depends, Query

from tcgleague.config import config
from tcgleague.logic.news import NEWS_FEED_SIZE, get_news, publish_news_article
from tcgleague.models.db.user import UserPublic
from tcgleague.models.news import NewsArticleBody
from tcgleague.routes.auth import admin_authenticated
from tcgleague.routes.models import NewsArticleResponse, NewsResponse

router = APIRouter(prefix=config.api_prefix)


@router.get("/news", response_model=NewsResponse)
async def get_news_feed(
    limit: int = Query(default=10, ge=1, le=NEWS_FEED_SIZE),
    category: str | None = Query(default=None),
    search: str | None = Query(default=None, description="Search in title, excerpt and tags."),
) -> NewsResponse:
    return NewsResponse(data=await get_news(limit, category=category, search=search))


@router.post("/news", response_model=NewsArticleResponse)
async def post_news_article(
    body: NewsArticleBody,
    _: UserPublic = Depends(admin_authenticated),
) -> NewsArticleResponse:
    return NewsArticleResponse(data=await publish_news_article(body))
