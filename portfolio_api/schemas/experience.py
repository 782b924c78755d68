from pydantic import Field
from typing import Optional

from portfolio_api.schemas.common import CamelModel


class ExperienceCreate(CamelModel):
    role: str = Field(..., min_length=1, max_length=200)
    organization: str = Field(..., min_length=1, max_length=200)
    period: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    type: str = Field("Experience", max_length=50)


class ExperienceUpdate(CamelModel):
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    organization: Optional[str] = Field(None, min_length=1, max_length=200)
    period: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, max_length=50)


class ExperienceResponse(ExperienceCreate):
    id: int
