import json

import structlog

from shared.storage import StorageAdapter

logger = structlog.get_logger(__name__)


class ServiceStatusStore:
    """
    The single "is the shop accepting orders" flag, stored as
    {"isServiceOpen": bool} under a fixed key.

    Reads fail open: a missing, malformed or unreadable record is reported
    as open, and the default record is written back. Writes propagate
    errors so the admin UI can revert its toggle.
    """

    STATUS_KEY = "config/service-status"
    DEFAULT_OPEN = True

    def __init__(self, storage: StorageAdapter):
        self.storage = storage

    async def _write(self, is_open: bool) -> None:
        payload = json.dumps({"isServiceOpen": is_open}).encode("utf-8")
        await self.storage.set(self.STATUS_KEY, payload, "application/json")

    async def _write_default(self) -> None:
        try:
            await self._write(self.DEFAULT_OPEN)
        except Exception as e:
            logger.error("service_status_default_write_failed", error=str(e))

    async def ensure_default(self) -> bool:
        """Return the stored flag, creating the default record when absent or
        malformed. Repeated calls never rewrite a well-formed record."""
        blob = await self.storage.get(self.STATUS_KEY)
        if blob is None:
            logger.info("service_status_missing", default=self.DEFAULT_OPEN)
            await self._write_default()
            return self.DEFAULT_OPEN
        try:
            value = json.loads(blob.data)["isServiceOpen"]
        except (ValueError, KeyError, TypeError):
            value = None
        if not isinstance(value, bool):
            logger.warning("service_status_malformed", default=self.DEFAULT_OPEN)
            await self._write_default()
            return self.DEFAULT_OPEN
        return value

    async def get_status(self) -> bool:
        try:
            return await self.ensure_default()
        except Exception as e:
            # Fail open
            logger.error("service_status_read_failed", error=str(e), default=self.DEFAULT_OPEN)
            await self._write_default()
            return self.DEFAULT_OPEN

    async def set_status(self, is_open: bool) -> None:
        await self._write(is_open)
        logger.info("service_status_set", is_open=is_open)
