import uuid
from datetime import datetime, timezone
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
    frozen=True,
)


class FAQ(BaseModel):
    model_config = _WIRE_CONFIG

    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class ArticleContent(BaseModel):
    """The generated fields of an article, as returned by the text backend."""

    model_config = _WIRE_CONFIG

    seo_title: str = Field(min_length=1)
    meta_description: str = Field(
        min_length=1,
        description="Target length is 150–160 characters.",
    )
    focus_keyword: str = Field(min_length=1)
    permalink_suggestion: str = Field(min_length=1)
    tags: List[Annotated[str, Field(min_length=1)]] = Field(min_length=5, max_length=7)
    blog_outline: str = Field(min_length=1)
    full_article: str = Field(min_length=1)
    featured_image_prompt: str = Field(min_length=1)
    faq: List[FAQ] = Field(min_length=3, max_length=5)


class Article(ArticleContent):
    """A generated article with its identity; immutable once created."""

    id: str
    created_at: datetime

    @classmethod
    def from_content(cls, content: ArticleContent) -> "Article":
        return cls(
            id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            **content.model_dump(),
        )
