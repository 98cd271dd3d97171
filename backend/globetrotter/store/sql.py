import logging
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from globetrotter.store.base import EntityStore, OrderBy, RecordNotFound, StoreError

logger = logging.getLogger(__name__)


class SqlEntityStore(EntityStore):
    """Entity store backed by a SQLAlchemy session."""

    def __init__(self, db: Session, model, record_type: Type[BaseModel]):
        self.db = db
        self.model = model
        self.record_type = record_type
        self.entity = model.__tablename__
        self._columns = {c.name for c in model.__table__.columns}

    def _to_record(self, row):
        return self.record_type.model_validate(row)

    def _column_values(self, data: Mapping[str, Any]) -> dict:
        return {k: v for k, v in data.items() if k in self._columns}

    def _fail(self, operation: str, exc: Exception) -> StoreError:
        self.db.rollback()
        logger.error(f"{self.entity}.{operation} failed: {exc}")
        return StoreError(f"{self.entity}.{operation} failed: {exc}")

    async def list(self, filters=None, order_by: Optional[OrderBy] = None):
        try:
            query = self.db.query(self.model)
            if filters:
                query = query.filter_by(**filters)
            if order_by:
                column = getattr(self.model, order_by.field)
                query = query.order_by(column.desc() if order_by.descending else column.asc())
            return [self._to_record(row) for row in query.all()]
        except SQLAlchemyError as e:
            raise self._fail("list", e) from e

    async def get_by_id(self, record_id: str):
        try:
            row = self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._fail("get_by_id", e) from e
        return self._to_record(row) if row else None

    async def insert(self, data):
        row = self.model(**self._column_values(data))
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("insert", e) from e
        return self._to_record(row)

    async def update(self, record_id: str, data):
        try:
            row = self.db.get(self.model, record_id)
            if not row:
                raise RecordNotFound(self.entity, record_id)
            for key, value in self._column_values(data).items():
                if key != "id":
                    setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e
        return self._to_record(row)

    async def delete(self, record_id: str) -> bool:
        try:
            row = self.db.get(self.model, record_id)
            if not row:
                return False
            # ORM cascade removes owned children
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e
        return True
