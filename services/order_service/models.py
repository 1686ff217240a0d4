from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class Store(str, Enum):
    TEMU = "Temu"
    ALIEXPRESS = "AliExpress"


class Order(BaseModel):
    """Persisted order record. Stored as flat JSON with camelCase keys."""

    order_id: str
    created_at: int # epoch millis, also embedded in order_id
    full_name: str
    phone: str
    email: str
    address: str
    store: Store
    notes: Optional[str] = None
    screenshot: str # attachment locator
    payment_proof: Optional[str] = None # attachment locator, replaced on re-submission
    is_processed: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_record(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_record(cls, raw: bytes) -> "Order":
        return cls.model_validate_json(raw)
