from typing import Optional

from .base import Blob, StorageAdapter
from .factory import build_storage
from .memory import MemoryStorage

_storage: Optional[StorageAdapter] = None


def get_storage() -> StorageAdapter:
    """FastAPI dependency: the process-wide storage backend."""
    global _storage
    if _storage is None:
        _storage = build_storage()
    return _storage


__all__ = [
    "Blob",
    "StorageAdapter",
    "MemoryStorage",
    "build_storage",
    "get_storage",
]
