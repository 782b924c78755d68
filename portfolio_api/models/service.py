from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from portfolio_api.db.base_class import Base, utc_now


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    summary = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    display_order = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utc_now)
