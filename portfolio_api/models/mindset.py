from sqlalchemy import Column, Integer, String, Text, JSON
from portfolio_api.db.base_class import Base


class MindsetPrinciple(Base):
    __tablename__ = "mindset"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(100), nullable=False, default="Brain")
    tags = Column(JSON, nullable=False, default=list)
