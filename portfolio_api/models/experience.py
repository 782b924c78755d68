from sqlalchemy import Column, Integer, String, Text
from portfolio_api.db.base_class import Base


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String(200), nullable=False)
    organization = Column(String(200), nullable=False)
    period = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="Experience")
