from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.experience import Experience
from portfolio_api.schemas.experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


@router.get("", response_model=List[ExperienceResponse])
def list_experiences(db: Session = Depends(get_db)):
    return db.query(Experience).order_by(Experience.id).all()


@router.get("/{experience_id}", response_model=ExperienceResponse)
def get_experience(experience_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, Experience, experience_id, "Experience")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_experience(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(ExperienceCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    experience = ContentService.create(db, Experience, result.value.model_dump())
    return success(
        data=serialize(ExperienceResponse, experience),
        message="Experience created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/{experience_id}")
def update_experience(
    experience_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    experience = ContentService.get_or_404(db, Experience, experience_id, "Experience")
    result = parse_model(ExperienceUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    experience = ContentService.update(db, experience, result.value.model_dump(exclude_unset=True))
    return success(data=serialize(ExperienceResponse, experience), message="Experience updated successfully")


@router.delete("/{experience_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_experience(
    experience_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    experience = ContentService.get_or_404(db, Experience, experience_id, "Experience")
    ContentService.delete(db, experience)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
