from typing import Optional

from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

from .lifecycle import OrderState, state_of
from .models import Order, Store


class OrderCreate(BaseModel):
    full_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: EmailStr
    address: str = Field(min_length=1)
    store: Store
    notes: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class PaymentInstructions(BaseModel):
    bank_name: str
    account_name: str
    account_number: str
    reference: str # the order id, quoted on the bank transfer

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderSubmitted(BaseModel):
    order_id: str
    payment: PaymentInstructions

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class OrderStateResponse(BaseModel):
    order_id: str
    state: OrderState
    has_payment_proof: bool
    is_processed: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_order(cls, order: Order) -> "OrderStateResponse":
        return cls(
            order_id=order.order_id,
            state=state_of(order),
            has_payment_proof=order.payment_proof is not None,
            is_processed=order.is_processed,
        )


class OrderResponse(BaseModel):
    order_id: str
    created_at: int
    full_name: str
    phone: str
    email: str
    address: str
    store: Store
    notes: Optional[str]
    screenshot: str
    payment_proof: Optional[str]
    is_processed: bool
    state: OrderState

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(**order.model_dump(), state=state_of(order))
