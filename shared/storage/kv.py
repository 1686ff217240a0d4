import base64
import binascii
from typing import List, Optional

import httpx
import structlog

from shared.config import settings
from shared.errors import StorageError, UploadError

from .base import Blob, StorageAdapter

logger = structlog.get_logger(__name__)

_DATA_URI_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def encode_data_uri(data: bytes, content_type: str) -> str:
    return f"{_DATA_URI_PREFIX}{content_type}{_BASE64_MARKER}{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(value: str) -> Optional[Blob]:
    if not value.startswith(_DATA_URI_PREFIX) or _BASE64_MARKER not in value:
        return None
    header, _, payload = value.partition(_BASE64_MARKER)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    return Blob(data=data, content_type=header[len(_DATA_URI_PREFIX):] or "application/octet-stream")


class KeyValueStorage(StorageAdapter):
    """
    Generic string key/value storage API. Values must be text, so binary
    content is stored as a base64 data URI, and that URI doubles as the
    attachment locator.

    Wire format:
        GET    /<key>          -> {"key": ..., "value": "..."} | 404
        PUT    /<key>          <- {"value": "..."}
        DELETE /<key>          -> {"deleted": true} | 404
        GET    /?prefix=<p>    -> {"keys": [...]}
    """

    name = "kv"

    def __init__(
        self,
        api_url: str = settings.KV_API_URL,
        token: str = settings.KV_API_TOKEN,
        client: Optional[httpx.AsyncClient] = None,
    ):
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
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise StorageError(f"KV request {method} {path} failed: {e}") from e
        if resp.status_code != 404 and resp.is_error:
            raise StorageError(f"KV request {method} {path} failed: HTTP {resp.status_code}")
        return resp

    async def get(self, key: str) -> Optional[Blob]:
        resp = await self._send("GET", f"/{key}")
        if resp.status_code == 404:
            return None
        try:
            value = resp.json()["value"]
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Malformed KV response for '{key}'") from e
        if value is None:
            return None
        blob = decode_data_uri(value)
        if blob is not None:
            return blob
        return Blob(data=value.encode("utf-8"), content_type="application/json")

    async def set(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        if content_type == "application/json":
            value = data.decode("utf-8")
        else:
            value = encode_data_uri(data, content_type)
        await self._send("PUT", f"/{key}", json={"value": value})

    async def delete(self, key: str) -> bool:
        resp = await self._send("DELETE", f"/{key}")
        if resp.status_code == 404:
            return False
        try:
            return bool(resp.json().get("deleted", True))
        except ValueError:
            return True

    async def list(self, prefix: str = "") -> List[str]:
        resp = await self._send("GET", "/", params={"prefix": prefix})
        if resp.status_code == 404:
            return []
        try:
            return sorted(resp.json()["keys"])
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Malformed KV listing for prefix '{prefix}'") from e

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        locator = encode_data_uri(data, content_type)
        try:
            await self._send("PUT", f"/{key}", json={"value": locator})
        except StorageError as e:
            logger.error("attachment_upload_failed", key=key, backend=self.name)
            raise UploadError(f"Failed to upload attachment: {e.message}") from e
        return locator
