from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.mindset import MindsetPrinciple
from portfolio_api.schemas.mindset import MindsetCreate, MindsetResponse, MindsetUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()

RESOURCE = "Mindset principle"


@router.get("", response_model=List[MindsetResponse])
def list_mindset(db: Session = Depends(get_db)):
    return db.query(MindsetPrinciple).order_by(MindsetPrinciple.id).all()


@router.get("/{principle_id}", response_model=MindsetResponse)
def get_principle(principle_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, MindsetPrinciple, principle_id, RESOURCE)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_principle(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(MindsetCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    principle = ContentService.create(db, MindsetPrinciple, result.value.model_dump())
    return success(
        data=serialize(MindsetResponse, principle),
        message="Mindset principle created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{principle_id}")
def update_principle(
    principle_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    principle = ContentService.get_or_404(db, MindsetPrinciple, principle_id, RESOURCE)
    result = parse_model(MindsetUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    principle = ContentService.update(db, principle, result.value.model_dump(exclude_unset=True))
    return success(
        data=serialize(MindsetResponse, principle),
        message="Mindset principle updated successfully",
    )


@router.delete("/{principle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_principle(
    principle_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    principle = ContentService.get_or_404(db, MindsetPrinciple, principle_id, RESOURCE)
    ContentService.delete(db, principle)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
