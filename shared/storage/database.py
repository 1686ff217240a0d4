from typing import List, Optional

import structlog
from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError

from shared.config import settings
from shared.config.database import AsyncSessionLocal, Base, engine
from shared.errors import StorageError, UploadError
from shared.security.attachment_links import sign_attachment_key

from .base import Blob, StorageAdapter
from .models import StoredObject

logger = structlog.get_logger(__name__)


class DatabaseStorage(StorageAdapter):
    """
    Postgres-backed object table. Attachments are served back by the order
    app, so locators are signed links: ATTACHMENT_URL_PREFIX/<link>.
    """

    name = "database"

    def __init__(self, session_factory=AsyncSessionLocal, db_engine=engine):
        self._session_factory = session_factory
        self._engine = db_engine

    async def open(self) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.execute(text("CREATE SCHEMA IF NOT EXISTS storage_schema"))
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to prepare storage schema: {e}") from e

    async def close(self) -> None:
        await self._engine.dispose()

    async def get(self, key: str) -> Optional[Blob]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(StoredObject).where(StoredObject.key == key))
                obj = result.scalars().first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        if obj is None:
            return None
        return Blob(data=obj.data, content_type=obj.content_type)

    async def set(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        try:
            async with self._session_factory() as db:
                await db.merge(StoredObject(key=key, data=data, content_type=content_type))
                await db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    async def delete(self, key: str) -> bool:
        try:
            async with self._session_factory() as db:
                result = await db.execute(delete(StoredObject).where(StoredObject.key == key))
                await db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete '{key}': {e}") from e
        return result.rowcount > 0

    async def list(self, prefix: str = "") -> List[str]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(StoredObject.key)
                    .where(StoredObject.key.startswith(prefix, autoescape=True))
                    .order_by(StoredObject.key)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list '{prefix}': {e}") from e

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        try:
            link = sign_attachment_key(key)
        except RuntimeError as e:
            logger.error("attachment_link_unsigned", key=key, backend=self.name)
            raise UploadError(f"Failed to upload attachment: {e}") from e
        try:
            await self.set(key, data, content_type)
        except StorageError as e:
            logger.error("attachment_upload_failed", key=key, backend=self.name)
            raise UploadError(f"Failed to upload attachment: {e.message}") from e
        return f"{settings.ATTACHMENT_URL_PREFIX.rstrip('/')}/{link}"
