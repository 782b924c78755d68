from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from portfolio_api.db.base_class import Base, utc_now


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    slug = Column(String(300), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    featured_image = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="draft", index=True)  # draft / published
    published_at = Column(DateTime, nullable=True)
    view_count = Column(Integer, nullable=False, default=0)
    read_time_minutes = Column(Integer, nullable=True)
    meta_title = Column(String(200), nullable=True)
    meta_description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    tag_rows = relationship(
        "ArticleTag",
        back_populates="article",
        cascade="all, delete-orphan",
        order_by="ArticleTag.id",
    )

    @property
    def tags(self):
        return [row.tag for row in self.tag_rows]


class ArticleTag(Base):
    __tablename__ = "article_tags"

    id = Column(Integer, primary_key=True, index=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False)
    tag = Column(String(100), nullable=False)

    article = relationship("Article", back_populates="tag_rows")

    __table_args__ = (
        UniqueConstraint("article_id", "tag", name="unique_article_tag"),
    )
