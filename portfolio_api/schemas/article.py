from datetime import datetime
from pydantic import Field
from typing import List, Literal, Optional

from portfolio_api.schemas.common import CamelModel

ArticleStatus = Literal["draft", "published"]


class ArticleCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    slug: Optional[str] = Field(None, max_length=300)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = Field(None, max_length=500)
    status: ArticleStatus = "draft"
    published_at: Optional[datetime] = None
    read_time_minutes: Optional[int] = Field(None, ge=0)
    meta_title: Optional[str] = Field(None, max_length=200)
    meta_description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ArticleUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    slug: Optional[str] = Field(None, min_length=1, max_length=300)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = Field(None, max_length=500)
    status: Optional[ArticleStatus] = None
    published_at: Optional[datetime] = None
    read_time_minutes: Optional[int] = Field(None, ge=0)
    meta_title: Optional[str] = Field(None, max_length=200)
    meta_description: Optional[str] = None
    tags: Optional[List[str]] = None


class ArticleResponse(CamelModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    status: str
    published_at: Optional[datetime] = None
    view_count: int = 0
    read_time_minutes: Optional[int] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
