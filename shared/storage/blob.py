from typing import List, Optional

import httpx
import structlog

from shared.config import settings
from shared.errors import StorageError, UploadError

from .base import Blob, StorageAdapter

logger = structlog.get_logger(__name__)


class BlobStorage(StorageAdapter):
    """
    Object store reached over REST (Supabase/Vercel style buckets). Uploaded
    attachments are published under BLOB_PUBLIC_URL, so locators are public
    URLs the admin UI can render directly.
    """

    name = "blob"

    def __init__(
        self,
        api_url: str = settings.BLOB_API_URL,
        public_url: str = settings.BLOB_PUBLIC_URL,
        token: str = settings.BLOB_API_TOKEN,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.public_url = public_url.rstrip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = client or httpx.AsyncClient(
            base_url=api_url,
            headers=headers,
            timeout=settings.STORAGE_TIMEOUT_SECONDS,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise StorageError(f"Blob store request {method} {path} failed: {e}") from e

    @staticmethod
    def _check(resp: httpx.Response, action: str, key: str):
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StorageError(f"Failed to {action} '{key}': HTTP {resp.status_code}") from e

    async def get(self, key: str) -> Optional[Blob]:
        resp = await self._send("GET", f"/{key}")
        if resp.status_code == 404:
            return None
        self._check(resp, "read", key)
        return Blob(
            data=resp.content,
            content_type=resp.headers.get("content-type", "application/octet-stream"),
        )

    async def set(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        resp = await self._send(
            "PUT",
            f"/{key}",
            content=data,
            headers={"content-type": content_type, "x-upsert": "true"},
        )
        self._check(resp, "write", key)

    async def delete(self, key: str) -> bool:
        resp = await self._send("DELETE", f"/{key}")
        if resp.status_code == 404:
            return False
        self._check(resp, "delete", key)
        return True

    async def list(self, prefix: str = "") -> List[str]:
        resp = await self._send("GET", "/", params={"prefix": prefix})
        self._check(resp, "list", prefix)
        try:
            return sorted(resp.json()["keys"])
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Malformed listing for prefix '{prefix}'") from e

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        try:
            await self.set(key, data, content_type)
        except StorageError as e:
            logger.error("attachment_upload_failed", key=key, backend=self.name)
            raise UploadError(f"Failed to upload attachment: {e.message}") from e
        return f"{self.public_url}/{key}"
