from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from portfolio_api.api.deps import AdminIdentity, require_admin
from portfolio_api.db.session import get_db
from portfolio_api.models.article import Article
from portfolio_api.schemas.article import ArticleCreate, ArticleResponse, ArticleUpdate
from portfolio_api.schemas.common import IdList
from portfolio_api.services.article_service import ArticleService
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.response import serialize, success, validation_error
from portfolio_api.utils.validation import Invalid, parse_model

router = APIRouter()


@router.get("", response_model=List[ArticleResponse])
def list_articles(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return ArticleService.list_articles(db, status_filter)


@router.get("/{slug}", response_model=ArticleResponse)
def get_article(slug: str, db: Session = Depends(get_db)):
    return ArticleService.get_by_slug(db, slug)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_article(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(ArticleCreate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    article = ArticleService.create_article(db, result.value)
    return success(
        data=serialize(ArticleResponse, article),
        message="Article created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/bulk-delete", status_code=status.HTTP_204_NO_CONTENT)
def bulk_delete_articles(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(IdList, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    ContentService.bulk_delete(db, Article, result.value.ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{article_id}")
def update_article(
    article_id: int,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    result = parse_model(ArticleUpdate, payload)
    if isinstance(result, Invalid):
        return validation_error(result.errors)

    article = ArticleService.update_article(db, article_id, result.value)
    return success(data=serialize(ArticleResponse, article), message="Article updated successfully")


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article(
    article_id: int,
    db: Session = Depends(get_db),
    _: AdminIdentity = Depends(require_admin),
):
    article = ContentService.get_or_404(db, Article, article_id, "Article")
    ContentService.delete(db, article)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
