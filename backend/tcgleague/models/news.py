from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator


class NewsArticleBody(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    excerpt: str = Field(default="", max_length=500)
    content: str = ""
    image_url: str | None = Field(default=None, max_length=500)
    author: str = Field(default="", max_length=120)
    published_at: datetime_utc | None = None
    source: str = Field(default="", max_length=120)
    source_url: str = Field(default="", max_length=500)
    category: str = Field(default="General", min_length=1, max_length=40)
    tags: list[str] = Field(default_factory=list)
    is_official: bool = False

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip().lower() for tag in value if tag.strip()]
