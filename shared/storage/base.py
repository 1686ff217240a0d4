from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Blob:
    data: bytes
    content_type: str = "application/octet-stream"

    def text(self) -> str:
        return self.data.decode("utf-8")


class StorageAdapter(ABC):
    """
    Key/blob capability every backend provides. Records and attachments are
    addressed by key alone; backends raise StorageError (UploadError for
    upload) and never leak their own exception types.
    """

    name = "abstract"

    async def open(self) -> None:
        """Prepare the backend. Safe to call more than once."""

    async def close(self) -> None:
        """Release connections held by the backend."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Blob]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a key. Returns False when nothing was stored under it."""

    @abstractmethod
    async def list(self, prefix: str = "") -> List[str]:
        ...

    @abstractmethod
    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store binary content and return a locator the UI can resolve."""
