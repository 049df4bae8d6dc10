from heliclockter import datetime_utc
from pydantic import Field, field_validator

from tcgleague.models.db.shared import BaseModelORM, parse_json_list
from tcgleague.utils.id_types import NewsArticleId


class NewsArticleInsertable(BaseModelORM):
    title: str
    excerpt: str = ""
    content: str = ""
    image_url: str | None = None
    author: str = ""
    published_at: datetime_utc
    source: str = ""
    source_url: str = ""
    category: str = "General"
    tags: list[str] = Field(default_factory=list)
    is_official: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def parse_json_tags(cls, value: object) -> list:
        return parse_json_list(value, "news tags")

    def matches(self, search: str) -> bool:
        term = search.strip().lower()
        return (
            term in self.title.lower()
            or term in self.excerpt.lower()
            or any(term in tag.lower() for tag in self.tags)
        )


class NewsArticle(NewsArticleInsertable):
    id: NewsArticleId
