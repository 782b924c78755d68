from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from portfolio_api.db.base_class import Base, utc_now


class SeoSettings(Base):
    __tablename__ = "seo_settings"

    id = Column(Integer, primary_key=True, index=True)
    page_slug = Column(String(200), unique=True, nullable=False, index=True)
    meta_title = Column(String(200), nullable=False)
    meta_description = Column(Text, nullable=False)
    og_title = Column(String(200), nullable=True)
    og_description = Column(Text, nullable=True)
    og_image = Column(String(500), nullable=True)
    keywords = Column(Text, nullable=True)
    canonical_url = Column(String(500), nullable=True)
    noindex = Column(Boolean, nullable=False, default=False)
    twitter_card = Column(String(50), nullable=False, default="summary_large_image")
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
