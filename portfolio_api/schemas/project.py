from pydantic import Field
from typing import List, Optional

from portfolio_api.schemas.common import CamelModel


class ProjectBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    image_url: str = Field("", max_length=500)
    category: str = Field(..., min_length=1, max_length=100)
    status: str = Field("Completed", max_length=50)
    tech_stack: List[str] = Field(default_factory=list)
    github_url: Optional[str] = Field(None, max_length=500)
    live_url: Optional[str] = Field(None, max_length=500)
    display_order: int = 0
    problem_statement: Optional[str] = None
    motivation: Optional[str] = None
    system_design: Optional[str] = None
    challenges: Optional[str] = None
    learnings: Optional[str] = None
    is_flagship: bool = False
    impact: Optional[str] = None
    role: Optional[str] = Field(None, max_length=200)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[str] = Field(None, max_length=50)
    tech_stack: Optional[List[str]] = None
    github_url: Optional[str] = Field(None, max_length=500)
    live_url: Optional[str] = Field(None, max_length=500)
    display_order: Optional[int] = None
    problem_statement: Optional[str] = None
    motivation: Optional[str] = None
    system_design: Optional[str] = None
    challenges: Optional[str] = None
    learnings: Optional[str] = None
    is_flagship: Optional[bool] = None
    impact: Optional[str] = None
    role: Optional[str] = Field(None, max_length=200)


class ProjectResponse(ProjectBase):
    id: int
