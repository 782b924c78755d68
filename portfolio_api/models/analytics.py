from sqlalchemy import Column, Integer, String, DateTime
from portfolio_api.db.base_class import Base, utc_now


class AnalyticsEvent(Base):
    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), nullable=False, index=True)  # page_view, project_click, ...
    target_id = Column(Integer, nullable=True)
    path = Column(String(500), nullable=False, default="")
    browser = Column(String(100), nullable=True)
    os = Column(String(100), nullable=True)
    device = Column(String(50), nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utc_now)
