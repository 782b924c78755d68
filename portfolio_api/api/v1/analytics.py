from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.schemas.analytics import AnalyticsEventCreate, AnalyticsEventResponse, AnalyticsSummary
from portfolio_api.services.analytics_service import AnalyticsService
from portfolio_api.utils.response import serialize, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()
logger = structlog.get_logger()


@router.post("/track", status_code=status.HTTP_201_CREATED)
def track_event(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Best-effort event logging: a failed write never fails the page."""
    result = parse_model(AnalyticsEventCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    try:
        event = AnalyticsService.log_event(db, result.value)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("analytics_write_failed", event_type=result.value.type, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content={"success": False, "message": "Event not recorded"},
        )

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=serialize(AnalyticsEventResponse, event),
    )


@router.get("/summary", response_model=AnalyticsSummary)
def analytics_summary(
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    return AnalyticsSummary(**AnalyticsService.summary(db))
