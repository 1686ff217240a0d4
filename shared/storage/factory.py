from shared.config import settings

from .base import StorageAdapter


def build_storage(backend: str = settings.STORAGE_BACKEND) -> StorageAdapter:
    """Instantiate the configured backend. Imports are deferred so unused
    drivers (asyncpg, remote endpoints) are never touched."""
    if backend == "memory":
        from .memory import MemoryStorage
        return MemoryStorage()
    if backend == "database":
        from .database import DatabaseStorage
        return DatabaseStorage()
    if backend == "blob":
        from .blob import BlobStorage
        return BlobStorage()
    if backend == "kv":
        from .kv import KeyValueStorage
        return KeyValueStorage()
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'. Use memory, database, blob or kv.")
