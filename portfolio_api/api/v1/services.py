from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.service import Service
from portfolio_api.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import success, serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


@router.get("", response_model=List[ServiceResponse])
def list_services(db: Session = Depends(get_db)):
    return db.query(Service).order_by(Service.display_order, Service.id).all()


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(service_id: int, db: Session = Depends(get_db)):
    return ContentService.get_or_404(db, Service, service_id, "Service")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_service(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(ServiceCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    service = ContentService.create(db, Service, result.value.model_dump())
    return success(
        data=serialize(ServiceResponse, service),
        message="Service created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{service_id}")
def update_service(
    service_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    service = ContentService.get_or_404(db, Service, service_id, "Service")
    result = parse_model(ServiceUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    service = ContentService.update(db, service, result.value.model_dump(exclude_unset=True))
    return success(data=serialize(ServiceResponse, service), message="Service updated successfully")


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(
    service_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    service = ContentService.get_or_404(db, Service, service_id, "Service")
    ContentService.delete(db, service)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
