from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from portfolio_api.db.base_class import Base


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False, default="Core")
    icon = Column(String(100), nullable=False, default="Code")
    description = Column(Text, nullable=False, default="")
    proof = Column(Text, nullable=False, default="")

    # Position on the skills tree, in percent of the canvas
    x = Column(Float, nullable=False, default=50)
    y = Column(Float, nullable=False, default=50)

    outgoing = relationship(
        "SkillConnection",
        foreign_keys="SkillConnection.from_skill_id",
        cascade="all, delete-orphan",
    )
    incoming = relationship(
        "SkillConnection",
        foreign_keys="SkillConnection.to_skill_id",
        cascade="all, delete-orphan",
    )


class SkillConnection(Base):
    __tablename__ = "skill_connections"

    id = Column(Integer, primary_key=True, index=True)
    from_skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    to_skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("from_skill_id", "to_skill_id", name="unique_skill_connection"),
    )
