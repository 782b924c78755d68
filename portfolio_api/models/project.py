from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from portfolio_api.db.base_class import Base, utc_now


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False, default="")
    category = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, default="Completed")
    tech_stack = Column(JSON, nullable=False, default=list)
    github_url = Column(String(500), nullable=True)
    live_url = Column(String(500), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)

    # Case study
    problem_statement = Column(Text, nullable=True)
    motivation = Column(Text, nullable=True)
    system_design = Column(Text, nullable=True)
    challenges = Column(Text, nullable=True)
    learnings = Column(Text, nullable=True)
    is_flagship = Column(Boolean, nullable=False, default=False)
    impact = Column(Text, nullable=True)
    role = Column(String(200), nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
