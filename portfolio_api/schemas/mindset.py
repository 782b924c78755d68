from pydantic import Field
from typing import List, Optional

from portfolio_api.schemas.common import CamelModel


class MindsetCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., max_length=5000)
    icon: str = Field("Brain", max_length=100)
    tags: List[str] = Field(default_factory=list)


class MindsetUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    icon: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None


class MindsetResponse(MindsetCreate):
    id: int
