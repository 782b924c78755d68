from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.testimonial import Testimonial
from portfolio_api.schemas import testimonial as schemas
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


@router.get("", response_model=List[schemas.TestimonialResponse])
def list_testimonials(db: Session = Depends(get_db)):
    return db.query(Testimonial).order_by(Testimonial.display_order, Testimonial.id).all()


@router.get("/{testimonial_id}", response_model=schemas.TestimonialResponse)
def get_testimonial(testimonial_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, Testimonial, testimonial_id, "Testimonial")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_testimonial(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(schemas.TestimonialCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    testimonial = ContentService.create(db, Testimonial, result.value.model_dump())
    return success(
        data=serialize(schemas.TestimonialResponse, testimonial),
        message="Testimonial created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{testimonial_id}")
def update_testimonial(
    testimonial_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    testimonial = ContentService.get_or_404(db, Testimonial, testimonial_id, "Testimonial")
    result = parse_model(schemas.TestimonialUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    testimonial = ContentService.update(db, testimonial, result.value.model_dump(exclude_unset=True))
    return success(
        data=serialize(schemas.TestimonialResponse, testimonial),
        message="Testimonial updated successfully",
    )


@router.delete("/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_testimonial(
    testimonial_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    testimonial = ContentService.get_or_404(db, Testimonial, testimonial_id, "Testimonial")
    ContentService.delete(db, testimonial)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
