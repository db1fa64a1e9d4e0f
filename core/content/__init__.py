"""Content graph store, seed loading and ingestion."""

from .loader import load_store, SeedNotFoundError
from .store import (
    ContentStore,
    PageRecord,
    get_store,
    set_store,
    clear_store,
    StoreNotInitializedError,
    BlockNotFoundError,
    MediaNotFoundError,
)

__all__ = [
    "load_store",
    "SeedNotFoundError",
    "ContentStore",
    "PageRecord",
    "get_store",
    "set_store",
    "clear_store",
    "StoreNotInitializedError",
    "BlockNotFoundError",
    "MediaNotFoundError",
]
