from sqlalchemy.orm import Session
from typing import Any, Dict, Iterable, List, Type, TypeVar

from portfolio_api.core.exceptions import NotFound

ModelT = TypeVar("ModelT")


class ContentService:
    """Row-level operations shared by the content routers."""

    @staticmethod
    def get_or_404(db: Session, model: Type[ModelT], item_id: int, resource: str) -> ModelT:
        item = db.get(model, item_id)
        if item is None:
            raise NotFound(resource)
        return item

    @staticmethod
    def apply_changes(item: Any, changes: Dict[str, Any]) -> None:
        """Copy explicitly sent fields onto a row.

        An explicit null for a NOT NULL column is ignored rather than
        turned into an integrity error.
        """
        columns = item.__table__.columns
        for field, value in changes.items():
            if value is None and field in columns and not columns[field].nullable:
                continue
            setattr(item, field, value)

    @staticmethod
    def create(db: Session, model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        item = model(**data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update(db: Session, item: ModelT, changes: Dict[str, Any]) -> ModelT:
        ContentService.apply_changes(item, changes)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def delete(db: Session, item: Any) -> None:
        db.delete(item)
        db.commit()

    @staticmethod
    def bulk_delete(db: Session, model: Type[ModelT], ids: Iterable[int]) -> int:
        """Delete rows by id; unknown ids are skipped. Returns the count removed."""
        rows: List[Any] = db.query(model).filter(model.id.in_(list(ids))).all()
        for row in rows:
            db.delete(row)
        db.commit()
        return len(rows)
