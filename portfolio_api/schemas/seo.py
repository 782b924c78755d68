from datetime import datetime
from pydantic import Field
from typing import Optional

from portfolio_api.schemas.common import CamelModel


class SeoSettingsCreate(CamelModel):
    page_slug: str = Field(..., min_length=1, max_length=200)
    meta_title: str = Field(..., min_length=1, max_length=200)
    meta_description: str = Field(..., min_length=1)
    og_title: Optional[str] = Field(None, max_length=200)
    og_description: Optional[str] = None
    og_image: Optional[str] = Field(None, max_length=500)
    keywords: Optional[str] = None
    canonical_url: Optional[str] = Field(None, max_length=500)
    noindex: bool = False
    twitter_card: str = Field("summary_large_image", max_length=50)


class SeoSettingsUpdate(CamelModel):
    page_slug: Optional[str] = Field(None, min_length=1, max_length=200)
    meta_title: Optional[str] = Field(None, min_length=1, max_length=200)
    meta_description: Optional[str] = Field(None, min_length=1)
    og_title: Optional[str] = Field(None, max_length=200)
    og_description: Optional[str] = None
    og_image: Optional[str] = Field(None, max_length=500)
    keywords: Optional[str] = None
    canonical_url: Optional[str] = Field(None, max_length=500)
    noindex: Optional[bool] = None
    twitter_card: Optional[str] = Field(None, max_length=50)


class SeoSettingsResponse(SeoSettingsCreate):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
