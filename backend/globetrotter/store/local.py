"""
Local key-value cache backend.

Mirrors the offline layer of the web client: each collection lives under one
storage key as a JSON list, ids look like ``trip-<millis>-<random>``. The
storage can be purely in-process or written through to a JSON file.
"""

import json
import logging
import secrets
import string
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel

from globetrotter.store.base import EntityStore, OrderBy, RecordNotFound, StoreError

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class LocalStorage:
    """Key -> list-of-rows storage, optionally persisted to a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self._data: dict[str, list[dict]] = {}
        if self.path and self.path.exists():
            try:
                self._data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise StoreError(f"Cannot read local store {self.path}: {e}") from e

    def get(self, key: str) -> list[dict]:
        return [dict(row) for row in self._data.get(key, [])]

    def set(self, key: str, rows: list[dict]) -> None:
        self._data[key] = rows
        if self.path:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            except OSError as e:
                raise StoreError(f"Cannot write local store {self.path}: {e}") from e

    def keys(self) -> list[str]:
        return sorted(self._data)


def make_local_id(prefix: str) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def _ordered(records: list, order_by: OrderBy) -> list:
    # Records missing the field go last in either direction
    present = [r for r in records if getattr(r, order_by.field) is not None]
    missing = [r for r in records if getattr(r, order_by.field) is None]
    present.sort(key=lambda r: getattr(r, order_by.field), reverse=order_by.descending)
    return present + missing


class LocalEntityStore(EntityStore):
    """Entity store over one LocalStorage key."""

    def __init__(
        self,
        storage: LocalStorage,
        key: str,
        record_type: Type[BaseModel],
        id_prefix: str,
    ):
        self.storage = storage
        self.key = key
        self.record_type = record_type
        self.id_prefix = id_prefix
        self.entity = key
        # (child store, foreign key field) pairs removed along with a record
        self.children: list[tuple["LocalEntityStore", str]] = []
        fields = record_type.model_fields
        self._timestamped = "created_at" in fields and "updated_at" in fields

    def own(self, child: "LocalEntityStore", foreign_key: str) -> None:
        self.children.append((child, foreign_key))

    def _records(self) -> list[BaseModel]:
        return [self.record_type.model_validate(row) for row in self.storage.get(self.key)]

    def _save(self, records: list[BaseModel]) -> None:
        self.storage.set(self.key, [r.model_dump(mode="json") for r in records])

    def _known(self, data: Mapping[str, Any]) -> dict:
        fields = self.record_type.model_fields
        return {k: v for k, v in data.items() if k in fields}

    def _validate(self, row: dict) -> BaseModel:
        try:
            return self.record_type.model_validate(row)
        except ValueError as e:
            raise StoreError(f"{self.entity}: invalid record: {e}") from e

    async def list(self, filters=None, order_by: Optional[OrderBy] = None):
        records = self._records()
        if filters:
            records = [
                r for r in records
                if all(getattr(r, field) == value for field, value in filters.items())
            ]
        if order_by:
            records = _ordered(records, order_by)
        return records

    async def get_by_id(self, record_id: str):
        for record in self._records():
            if record.id == record_id:
                return record
        return None

    async def insert(self, data):
        row = self._known(data)
        row["id"] = make_local_id(self.id_prefix)
        if self._timestamped:
            now = datetime.utcnow()
            row["created_at"] = now
            row["updated_at"] = now
        record = self._validate(row)
        records = self._records()
        records.append(record)
        self._save(records)
        return record

    async def update(self, record_id: str, data):
        records = self._records()
        for i, record in enumerate(records):
            if record.id != record_id:
                continue
            row = record.model_dump()
            row.update({k: v for k, v in self._known(data).items() if k != "id"})
            if self._timestamped:
                row["updated_at"] = datetime.utcnow()
            records[i] = self._validate(row)
            self._save(records)
            return records[i]
        raise RecordNotFound(self.entity, record_id)

    async def delete(self, record_id: str) -> bool:
        records = self._records()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        for child, foreign_key in self.children:
            for orphan in await child.list({foreign_key: record_id}):
                await child.delete(orphan.id)
        self._save(remaining)
        return True
