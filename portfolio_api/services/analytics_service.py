from sqlalchemy.orm import Session
from sqlalchemy import func

from portfolio_api.models.analytics import AnalyticsEvent
from portfolio_api.schemas.analytics import AnalyticsEventCreate

PAGE_VIEW = "page_view"


class AnalyticsService:

    @staticmethod
    def log_event(db: Session, data: AnalyticsEventCreate) -> AnalyticsEvent:
        event = AnalyticsEvent(**data.model_dump())
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def summary(db: Session) -> dict:
        events = db.query(func.count(AnalyticsEvent.id)).scalar() or 0
        total_views = (
            db.query(func.count(AnalyticsEvent.id))
            .filter(AnalyticsEvent.type == PAGE_VIEW)
            .scalar()
            or 0
        )
        return {"total_views": total_views, "events": events}
