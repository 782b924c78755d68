from sqlalchemy import Column, Integer, String, Text, DateTime
from portfolio_api.db.base_class import Base, utc_now


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(300), nullable=False, default="")
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now, index=True)
