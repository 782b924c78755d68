from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import Field
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.core.exceptions import Conflict
from portfolio_api.db.session import get_db
from portfolio_api.models.skill import Skill, SkillConnection
from portfolio_api.schemas.common import CamelModel
from portfolio_api.schemas.skill import SkillConnectionResponse, SkillCreate, SkillResponse, SkillUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


class SkillConnectionCreate(CamelModel):
    from_skill_id: int = Field(..., gt=0)
    to_skill_id: int = Field(..., gt=0)


@router.get("", response_model=List[SkillResponse])
def list_skills(db: Session = Depends(get_db)):
    return db.query(Skill).order_by(Skill.id).all()


# Declared before /{skill_id} so "connections" is not parsed as an id.
@router.get("/connections", response_model=List[SkillConnectionResponse])
def list_skill_connections(db: Session = Depends(get_db)):
    return db.query(SkillConnection).order_by(SkillConnection.id).all()


@router.post("/connections", status_code=status.HTTP_201_CREATED)
def create_skill_connection(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(SkillConnectionCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    data = result.value
    ContentService.get_or_404(db, Skill, data.from_skill_id, "Skill")
    ContentService.get_or_404(db, Skill, data.to_skill_id, "Skill")
    existing = (
        db.query(SkillConnection)
        .filter(
            SkillConnection.from_skill_id == data.from_skill_id,
            SkillConnection.to_skill_id == data.to_skill_id,
        )
        .first()
    )
    if existing:
        raise Conflict("Skill connection already exists")

    connection = ContentService.create(db, SkillConnection, data.model_dump())
    return success(
        data=serialize(SkillConnectionResponse, connection),
        message="Skill connection created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{skill_id}", response_model=SkillResponse)
def get_skill(skill_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, Skill, skill_id, "Skill")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_skill(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(SkillCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    skill = ContentService.create(db, Skill, result.value.model_dump())
    return success(
        data=serialize(SkillResponse, skill),
        message="Skill created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{skill_id}")
def update_skill(
    skill_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    skill = ContentService.get_or_404(db, Skill, skill_id, "Skill")
    result = parse_model(SkillUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    skill = ContentService.update(db, skill, result.value.model_dump(exclude_unset=True))
    return success(data=serialize(SkillResponse, skill), message="Skill updated successfully")


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    skill = ContentService.get_or_404(db, Skill, skill_id, "Skill")
    ContentService.delete(db, skill)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
