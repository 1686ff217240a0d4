import base64
from typing import Dict, List, Optional

from .base import Blob, StorageAdapter


class MemoryStorage(StorageAdapter):
    """Process-local storage. Attachment locators are base64 data URIs."""

    name = "memory"

    def __init__(self):
        self._objects: Dict[str, Blob] = {}

    async def get(self, key: str) -> Optional[Blob]:
        return self._objects.get(key)

    async def set(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        self._objects[key] = Blob(data=bytes(data), content_type=content_type)

    async def delete(self, key: str) -> bool:
        return self._objects.pop(key, None) is not None

    async def list(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self._objects if k.startswith(prefix))

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        await self.set(key, data, content_type)
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{content_type};base64,{encoded}"
