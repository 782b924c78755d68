from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.core.exceptions import Conflict, NotFound
from portfolio_api.db.session import get_db
from portfolio_api.models.seo import SeoSettings
from portfolio_api.schemas.seo import SeoSettingsCreate, SeoSettingsResponse, SeoSettingsUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import serialize, success, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()

DUPLICATE_SLUG = "SEO settings for this slug already exist"


def _slug_taken(db: Session, page_slug: str, exclude_id: int = None) -> bool:
    query = db.query(SeoSettings.id).filter(SeoSettings.page_slug == page_slug)
    if exclude_id is not None:
        query = query.filter(SeoSettings.id != exclude_id)
    return query.first() is not None


@router.get("", response_model=List[SeoSettingsResponse])
def list_seo_settings(
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    return db.query(SeoSettings).order_by(SeoSettings.page_slug).all()


@router.get("/{page_slug}", response_model=SeoSettingsResponse)
def get_seo_settings(page_slug: str, db: Session = Depends(get_db)):
    settings_row = db.query(SeoSettings).filter(SeoSettings.page_slug == page_slug).first()
    if not settings_row:
        raise NotFound("SEO settings")
    return settings_row


@router.post("", status_code=status.HTTP_201_CREATED)
def create_seo_settings(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(SeoSettingsCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    if _slug_taken(db, result.value.page_slug):
        raise Conflict(DUPLICATE_SLUG)

    settings_row = ContentService.create(db, SeoSettings, result.value.model_dump())
    return success(
        data=serialize(SeoSettingsResponse, settings_row),
        message="SEO settings created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{settings_id}")
def update_seo_settings(
    settings_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    settings_row = ContentService.get_or_404(db, SeoSettings, settings_id, "SEO settings")
    result = parse_model(SeoSettingsUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    changes = result.value.model_dump(exclude_unset=True)
    if changes.get("page_slug") and _slug_taken(db, changes["page_slug"], exclude_id=settings_id):
        raise Conflict(DUPLICATE_SLUG)

    settings_row = ContentService.update(db, settings_row, changes)
    return success(
        data=serialize(SeoSettingsResponse, settings_row),
        message="SEO settings updated successfully",
    )


@router.delete("/{settings_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_seo_settings(
    settings_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    settings_row = ContentService.get_or_404(db, SeoSettings, settings_id, "SEO settings")
    ContentService.delete(db, settings_row)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
