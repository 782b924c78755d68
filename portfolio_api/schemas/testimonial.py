from datetime import datetime
from pydantic import Field
from typing import Optional

from portfolio_api.schemas.common import CamelModel


class TestimonialCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    quote: str = Field(..., min_length=1)
    relationship: str = Field("Colleague", max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)
    display_order: int = 0


class TestimonialUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    quote: Optional[str] = Field(None, min_length=1)
    relationship: Optional[str] = Field(None, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)
    display_order: Optional[int] = None


class TestimonialResponse(TestimonialCreate):
    id: int
    created_at: Optional[datetime] = None
