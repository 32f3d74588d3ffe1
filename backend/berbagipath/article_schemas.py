from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class ArticleCreate(ApiModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    status: str = 'published'
    slug: Optional[str] = None
    author_id: Optional[str] = None


class ArticleUpdate(ApiModel):
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[str] = None
    slug: Optional[str] = None


class Article(ApiModel):
    id: str
    slug: str
    title: str
    excerpt: Optional[str] = None
    content: str
    image_url: Optional[str] = None
    author_id: Optional[str] = None
    status: str
    created_at: datetime.datetime
    updated_at: Optional[datetime.datetime] = None
