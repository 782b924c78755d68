from datetime import datetime
from pydantic import Field
from typing import Optional

from portfolio_api.schemas.common import CamelModel


class AnalyticsEventCreate(CamelModel):
    type: str = Field(..., min_length=1, max_length=50)
    target_id: Optional[int] = None
    path: str = Field("", max_length=500)
    browser: Optional[str] = Field(None, max_length=100)
    os: Optional[str] = Field(None, max_length=100)
    device: Optional[str] = Field(None, max_length=50)
    country: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)


class AnalyticsEventResponse(AnalyticsEventCreate):
    id: int
    created_at: Optional[datetime] = None


class AnalyticsSummary(CamelModel):
    total_views: int
    events: int
