from typing import List, Union

import structlog
from fastapi import Depends
from pydantic import ValidationError as SchemaError

from shared.attachments import Attachment, validate_attachment
from shared.errors import OrderDeskError, ServiceClosedError, ValidationError
from shared.observability import (
    ecomm_orders_processed_total,
    ecomm_orders_submitted_total,
    ecomm_payment_proofs_total,
)
from shared.storage import StorageAdapter, get_storage
from services.status_service.service import ServiceStatusView, get_status_view

from .lifecycle import OrderEvent, OrderState, next_state, state_of
from .models import Order
from .repository import OrderRepository
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)


def _describe(errors: list) -> str:
    parts = []
    for err in errors:
        field = ".".join(str(p) for p in err.get("loc", ())) or "input"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


class OrderService:
    """
    Order lifecycle controller: the operations the storefront and the admin
    panel call. Enforces the state machine in lifecycle.py on top of the
    repository, which stores whatever it is given.
    """

    def __init__(self, repository: OrderRepository, status: ServiceStatusView):
        self.repository = repository
        self.status = status

    async def submit_order(self, fields: Union[OrderCreate, dict], screenshot: Attachment) -> str:
        if not await self.status.is_open():
            ecomm_orders_submitted_total.labels(status="rejected").inc()
            raise ServiceClosedError("We are not accepting new orders right now. Please check back later.")

        try:
            data = fields if isinstance(fields, OrderCreate) else OrderCreate.model_validate(fields)
            validate_attachment(screenshot, "screenshot of your cart")
        except SchemaError as e:
            ecomm_orders_submitted_total.labels(status="rejected").inc()
            raise ValidationError(_describe(e.errors())) from e
        except ValidationError:
            ecomm_orders_submitted_total.labels(status="rejected").inc()
            raise

        try:
            order = await self.repository.create_order(data, screenshot)
        except OrderDeskError:
            ecomm_orders_submitted_total.labels(status="failed").inc()
            raise
        ecomm_orders_submitted_total.labels(status="success").inc()
        return order.order_id

    async def submit_payment_proof(self, order_id: str, proof: Attachment) -> Order:
        validate_attachment(proof, "payment proof")
        order = await self.repository.get_order(order_id)
        next_state(state_of(order), OrderEvent.SUBMIT_PROOF)
        updated = await self.repository.add_payment_proof(order_id, proof)
        ecomm_payment_proofs_total.inc()
        return updated

    async def list_orders(self, newest_first: bool = True) -> List[Order]:
        orders = await self.repository.get_all_orders()
        return sorted(orders, key=lambda o: o.created_at, reverse=newest_first)

    async def get_order(self, order_id: str) -> Order:
        return await self.repository.get_order(order_id)

    async def get_order_state(self, order_id: str) -> OrderState:
        return state_of(await self.repository.get_order(order_id))

    async def mark_order_processed(self, order_id: str) -> Order:
        order = await self.repository.get_order(order_id)
        state = state_of(order)
        next_state(state, OrderEvent.MARK_PROCESSED)
        if state == OrderState.PROCESSED:
            return order
        updated = await self.repository.mark_processed(order_id)
        ecomm_orders_processed_total.inc()
        return updated

    async def get_service_open(self) -> bool:
        return await self.status.is_open()

    async def set_service_open(self, is_open: bool) -> bool:
        return await self.status.set_open(is_open)


def get_order_service(
    storage: StorageAdapter = Depends(get_storage),
    status: ServiceStatusView = Depends(get_status_view),
) -> OrderService:
    return OrderService(OrderRepository(storage), status)
