from pydantic import Field
from typing import List, Optional

from portfolio_api.schemas.common import CamelModel


class ServiceCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    summary: str = Field(..., min_length=1, max_length=5000)
    category: str = Field(..., min_length=1, max_length=100)
    tags: List[str] = Field(default_factory=list)
    display_order: int = 0
    is_featured: bool = False


class ServiceUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    summary: Optional[str] = Field(None, min_length=1, max_length=5000)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    tags: Optional[List[str]] = None
    display_order: Optional[int] = None
    is_featured: Optional[bool] = None


class ServiceResponse(ServiceCreate):
    id: int
