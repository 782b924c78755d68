from sqlalchemy import Column, Integer, String, Text, DateTime
from portfolio_api.db.base_class import Base, utc_now


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    role = Column(String(200), nullable=False)
    company = Column(String(200), nullable=False)
    quote = Column(Text, nullable=False)
    relationship = Column(String(100), nullable=False, default="Colleague")
    avatar_url = Column(String(500), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utc_now)
