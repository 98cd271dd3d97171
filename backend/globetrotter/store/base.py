"""
Entity Store Adapter - the uniform CRUD surface the planner core talks to.

Two backends implement it: the relational store (SQLAlchemy) and the local
key-value cache. The core never knows which one it was handed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)


class StoreError(Exception):
    """A store operation was rejected by the backend."""


class RecordNotFound(StoreError):
    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


class EntityStore(ABC, Generic[R]):
    """CRUD operations over one entity type."""

    entity: str = "record"

    @abstractmethod
    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[OrderBy] = None,
    ) -> list[R]:
        """Records whose fields equal every value in `filters`."""

    @abstractmethod
    async def get_by_id(self, record_id: str) -> Optional[R]:
        ...

    @abstractmethod
    async def insert(self, data: Mapping[str, Any]) -> R:
        """Create a record; the backend assigns id and timestamps."""

    @abstractmethod
    async def update(self, record_id: str, data: Mapping[str, Any]) -> R:
        """Apply a partial update. Raises RecordNotFound for an unknown id."""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Delete a record and its owned children. False if it did not exist."""
