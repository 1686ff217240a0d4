from typing import Optional

import structlog

from shared.errors import StorageError
from shared.observability import ecomm_service_open
from shared.storage import get_storage

from .repository import ServiceStatusStore

logger = structlog.get_logger(__name__)


class ServiceStatusView:
    """
    In-process view of Open/Closed. Read once at start-up, then updated
    optimistically: set_open changes the view before the write completes
    and restores the previous value if the write fails.
    """

    def __init__(self, store: ServiceStatusStore):
        self.store = store
        self._is_open: Optional[bool] = None

    def _apply(self, is_open: bool):
        self._is_open = is_open
        ecomm_service_open.set(1 if is_open else 0)

    async def load(self) -> bool:
        self._apply(await self.store.get_status())
        return self._is_open

    async def is_open(self) -> bool:
        if self._is_open is None:
            return await self.load()
        return self._is_open

    async def set_open(self, is_open: bool) -> bool:
        previous = await self.is_open()
        self._apply(is_open)
        try:
            await self.store.set_status(is_open)
        except StorageError:
            logger.warning("service_status_reverted", attempted=is_open, restored=previous)
            self._apply(previous)
            raise
        return is_open


_view: Optional[ServiceStatusView] = None


def get_status_view() -> ServiceStatusView:
    """FastAPI dependency: the process-wide status view."""
    global _view
    if _view is None:
        _view = ServiceStatusView(ServiceStatusStore(get_storage()))
    return _view
