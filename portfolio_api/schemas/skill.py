from pydantic import Field
from typing import Optional

from portfolio_api.schemas.common import CamelModel


class SkillCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    status: str = Field("Core", max_length=50)
    icon: str = Field("Code", max_length=100)
    description: str = ""
    proof: str = ""
    x: float = Field(50, ge=0, le=100)
    y: float = Field(50, ge=0, le=100)


class SkillUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = Field(None, max_length=50)
    icon: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    proof: Optional[str] = None
    x: Optional[float] = Field(None, ge=0, le=100)
    y: Optional[float] = Field(None, ge=0, le=100)


class SkillResponse(SkillCreate):
    id: int


class SkillConnectionResponse(CamelModel):
    id: int
    from_skill_id: int
    to_skill_id: int
