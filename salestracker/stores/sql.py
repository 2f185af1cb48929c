"""SQLAlchemy-backed record store."""
import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salestracker.database import Base
from salestracker.stores.base import Predicate, filter_records

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SqlAlchemyRecordStore(Generic[T]):
    """Maps pydantic records onto one SQLAlchemy table.

    Every mutating call commits on its own; there is no transaction spanning
    several calls.
    """

    def __init__(self, db: Session, model: Type[Base], schema: Type[T]):
        self.db = db
        self.model = model
        self.schema = schema

    def _to_record(self, row) -> T:
        return self.schema.model_validate(row)

    def _commit(self) -> None:
        """Commit, or roll back and re-raise so the session stays usable."""
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.error("Commit to %s failed, rolling back", self.model.__tablename__)
            self.db.rollback()
            raise

    async def get_all(self) -> List[T]:
        rows = self.db.query(self.model).order_by(self.model.id).all()
        return [self._to_record(row) for row in rows]

    async def get_by_id(self, record_id: int) -> Optional[T]:
        row = self.db.get(self.model, record_id)
        return self._to_record(row) if row is not None else None

    async def add(self, entity: T) -> int:
        # Unset values fall back to the column defaults
        row = self.model(**entity.model_dump(exclude={"id"}, exclude_none=True))
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return row.id

    async def update(self, entity: T) -> None:
        row = self.db.get(self.model, entity.id)
        if row is None:
            logger.debug("Ignoring update of missing %s %s", self.model.__tablename__, entity.id)
            return
        for field, value in entity.model_dump(exclude={"id"}).items():
            setattr(row, field, value)
        self._commit()

    async def delete(self, record_id: int) -> None:
        row = self.db.get(self.model, record_id)
        if row is None:
            return
        self.db.delete(row)
        self._commit()

    async def query(self, predicate: Predicate) -> List[T]:
        # Predicates are plain Python callables, so they cannot be pushed
        # down to SQL.
        return filter_records(await self.get_all(), predicate)
