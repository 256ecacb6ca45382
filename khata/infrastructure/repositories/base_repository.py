"""
SQLAlchemy implementation of the Base Repository.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import exists as sa_exists, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from khata.core.exceptions import DuplicateEntryError, StorageError
from khata.domain.repositories.base import BaseRepository
from khata.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """ILIKE pattern matching ``term`` literally anywhere; use with ``escape=LIKE_ESCAPE``."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @contextmanager
    def guard(self) -> Iterator[None]:
        """Roll back and re-raise driver failures as storage errors."""
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEntryError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(str(exc)) from exc

    def create(self, values: Dict[str, Any]) -> ModelType:
        with self.guard():
            db_obj = self.model(**values)
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj

    def get_one(self, *where: Any) -> Optional[ModelType]:
        with self.guard():
            return self.db.query(self.model).filter(*where).first()

    def get_all(self, *where: Any, order_by: Any = None, offset: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        with self.guard():
            query = self.db.query(self.model).filter(*where)
            if order_by is not None:
                query = query.order_by(*order_by) if isinstance(order_by, (list, tuple)) else query.order_by(order_by)
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def update_where(self, values: Dict[str, Any], *where: Any) -> int:
        with self.guard():
            affected = self.db.query(self.model).filter(*where).update(values, synchronize_session=False)
            self.db.commit()
            return affected

    def delete_where(self, *where: Any) -> int:
        with self.guard():
            affected = self.db.query(self.model).filter(*where).delete(synchronize_session=False)
            self.db.commit()
            return affected

    def count(self, *where: Any) -> int:
        with self.guard():
            return self.db.query(func.count(self.model.id)).filter(*where).scalar() or 0

    def exists(self, *where: Any) -> bool:
        with self.guard():
            return bool(self.db.query(sa_exists().where(*where)).scalar())
