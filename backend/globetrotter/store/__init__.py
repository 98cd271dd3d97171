from globetrotter.store.base import EntityStore, OrderBy, RecordNotFound, StoreError
from globetrotter.store.local import LocalEntityStore, LocalStorage, make_local_id
from globetrotter.store.sql import SqlEntityStore
from globetrotter.store.registry import STORAGE_KEYS, Stores, build_local_stores, build_sql_stores

__all__ = [
    "EntityStore",
    "OrderBy",
    "RecordNotFound",
    "StoreError",
    "LocalEntityStore",
    "LocalStorage",
    "make_local_id",
    "SqlEntityStore",
    "STORAGE_KEYS",
    "Stores",
    "build_local_stores",
    "build_sql_stores",
]
