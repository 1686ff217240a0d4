import os

# Must be set before any app module is imported
os.environ.setdefault("OBSERVABILITY_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ["STORAGE_BACKEND"] = "memory"

import pytest

from shared.attachments import Attachment
from shared.errors import StorageError, UploadError
from shared.storage import MemoryStorage
from services.order_service.repository import OrderRepository
from services.order_service.service import OrderService
from services.status_service.repository import ServiceStatusStore
from services.status_service.service import ServiceStatusView

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x01" * 64

ORDER_FIELDS = {
    "fullName": "Ada Obi",
    "phone": "+2348012345678",
    "email": "ada@example.com",
    "address": "12 Allen Avenue, Ikeja, Lagos",
    "store": "Temu",
    "notes": "Size M for the jacket",
}


def make_attachment(data=PNG_BYTES, content_type="image/png", filename="cart.png") -> Attachment:
    return Attachment(filename=filename, content_type=content_type, data=data)


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now


class FlakyStorage(MemoryStorage):
    """MemoryStorage that can be told to fail specific operations."""

    def __init__(self):
        super().__init__()
        self.failures = {}
        self.calls = []

    def fail(self, op: str, prefix: str = ""):
        self.failures[op] = prefix

    def heal(self, op: str):
        self.failures.pop(op, None)

    def _check(self, op: str, key: str):
        self.calls.append((op, key))
        prefix = self.failures.get(op)
        if prefix is not None and key.startswith(prefix):
            if op == "upload":
                raise UploadError(f"injected {op} failure for {key}")
            raise StorageError(f"injected {op} failure for {key}")

    async def get(self, key):
        self._check("get", key)
        return await super().get(key)

    async def set(self, key, data, content_type="application/json"):
        self._check("set", key)
        return await super().set(key, data, content_type)

    async def delete(self, key):
        self._check("delete", key)
        return await super().delete(key)

    async def list(self, prefix=""):
        self._check("list", prefix)
        return await super().list(prefix)

    async def upload(self, key, data, content_type):
        self._check("upload", key)
        # Bypass the instrumented set so an injected set failure only hits records
        await MemoryStorage.set(self, key, data, content_type)
        return f"mem://{key}"


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository(storage, clock):
    return OrderRepository(storage, clock=clock)


@pytest.fixture
def status_store(storage):
    return ServiceStatusStore(storage)


@pytest.fixture
def status_view(status_store):
    return ServiceStatusView(status_store)


@pytest.fixture
def service(repository, status_view):
    return OrderService(repository, status_view)
