from sqlalchemy.orm import Session
from typing import List, Optional
import math

from slugify import slugify

from portfolio_api.core.exceptions import Conflict, NotFound
from portfolio_api.db.base_class import utc_now
from portfolio_api.models.article import Article, ArticleTag
from portfolio_api.schemas.article import ArticleCreate, ArticleUpdate
from portfolio_api.services.content_service import ContentService

WORDS_PER_MINUTE = 200


class ArticleService:

    @staticmethod
    def _estimate_read_time(content: str) -> int:
        words = len(content.split())
        return max(1, math.ceil(words / WORDS_PER_MINUTE))

    @staticmethod
    def _normalize_tags(tags: List[str]) -> List[str]:
        seen = []
        for tag in tags:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @staticmethod
    def _ensure_slug_available(db: Session, slug: str, exclude_id: Optional[int] = None) -> None:
        query = db.query(Article.id).filter(Article.slug == slug)
        if exclude_id is not None:
            query = query.filter(Article.id != exclude_id)
        if query.first() is not None:
            raise Conflict("An article with this slug already exists")

    @staticmethod
    def list_articles(db: Session, status: Optional[str] = None) -> List[Article]:
        query = db.query(Article)
        if status:
            query = query.filter(Article.status == status)
        return query.order_by(Article.created_at.desc(), Article.id.desc()).all()

    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Article:
        article = db.query(Article).filter(Article.slug == slug).first()
        if not article:
            raise NotFound("Article")
        return article

    @staticmethod
    def create_article(db: Session, data: ArticleCreate) -> Article:
        slug = slugify(data.slug or data.title)
        ArticleService._ensure_slug_available(db, slug)

        fields = data.model_dump(exclude={"slug", "tags"})
        if fields["read_time_minutes"] is None:
            fields["read_time_minutes"] = ArticleService._estimate_read_time(data.content)
        if data.status == "published" and fields["published_at"] is None:
            fields["published_at"] = utc_now()

        article = Article(slug=slug, **fields)
        article.tag_rows = [ArticleTag(tag=tag) for tag in ArticleService._normalize_tags(data.tags)]

        db.add(article)
        db.commit()
        db.refresh(article)
        return article

    @staticmethod
    def update_article(db: Session, article_id: int, data: ArticleUpdate) -> Article:
        article = ContentService.get_or_404(db, Article, article_id, "Article")
        changes = data.model_dump(exclude_unset=True)
        tags = changes.pop("tags", None)

        if changes.get("slug"):
            changes["slug"] = slugify(changes["slug"])
            ArticleService._ensure_slug_available(db, changes["slug"], exclude_id=article.id)

        if "content" in changes and "read_time_minutes" not in changes and changes["content"]:
            changes["read_time_minutes"] = ArticleService._estimate_read_time(changes["content"])

        if changes.get("status") == "published" and article.published_at is None and not changes.get("published_at"):
            changes["published_at"] = utc_now()

        ContentService.apply_changes(article, changes)

        if tags is not None:
            # Replace the whole tag set.
            article.tag_rows.clear()
            db.flush()
            article.tag_rows.extend(ArticleTag(tag=tag) for tag in ArticleService._normalize_tags(tags))

        db.commit()
        db.refresh(article)
        return article
