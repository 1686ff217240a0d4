import time
from typing import Callable, List, Set, Tuple

import structlog
from pydantic import ValidationError as SchemaError

from shared.attachments import Attachment
from shared.config import settings
from shared.errors import NotFoundError, StorageError
from shared.observability import ecomm_corrupt_records_skipped_total
from shared.storage import StorageAdapter

from .create_order_saga import build_create_order_saga
from .models import Order
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)

# Ids handed out but not yet written (or abandoned) by this process
_pending_ids: Set[str] = set()


def now_millis() -> int:
    return time.time_ns() // 1_000_000


class OrderRepository:
    """
    Maps order ids to order records on a StorageAdapter. Keys are derived
    from the order id alone, so no index is kept.
    """

    RECORD_PREFIX = "orders/records/"
    ATTACHMENT_PREFIX = "orders/attachments/"
    SCREENSHOT = "screenshot"
    PAYMENT_PROOF = "payment-proof"

    def __init__(self, storage: StorageAdapter, clock: Callable[[], int] = now_millis):
        self.storage = storage
        self.clock = clock

    @classmethod
    def record_key(cls, order_id: str) -> str:
        return f"{cls.RECORD_PREFIX}{order_id}.json"

    @classmethod
    def attachment_key(cls, order_id: str, kind: str) -> str:
        return f"{cls.ATTACHMENT_PREFIX}{order_id}/{kind}"

    async def allocate_order_id(self) -> Tuple[str, int]:
        """Return an unused (order_id, created_at) pair. Ids embed the
        creation millisecond; a taken millisecond is bumped forward.

        The id stays reserved in this process until release_order_id() is
        called, so concurrent submissions never share an id before either
        record is written. The storage check covers ids from earlier runs.
        """
        millis = self.clock()
        while True:
            order_id = f"{settings.ORDER_ID_PREFIX}{millis}"
            if order_id not in _pending_ids:
                # Reserve before the first await
                _pending_ids.add(order_id)
                try:
                    taken = await self.storage.get(self.record_key(order_id)) is not None
                except StorageError:
                    _pending_ids.discard(order_id)
                    raise
                if not taken:
                    return order_id, millis
                _pending_ids.discard(order_id)
            millis += 1

    @staticmethod
    def release_order_id(order_id: str) -> None:
        _pending_ids.discard(order_id)

    async def save(self, order: Order) -> None:
        await self.storage.set(self.record_key(order.order_id), order.to_record(), "application/json")

    async def create_order(self, data: OrderCreate, screenshot: Attachment) -> Order:
        ctx = {"repository": self, "data": data, "screenshot": screenshot}
        try:
            await build_create_order_saga().execute(ctx)
        finally:
            if "order_id" in ctx:
                self.release_order_id(ctx["order_id"])
        logger.info("order_created", order_id=ctx["order_id"], store=data.store.value)
        return ctx["order"]

    async def get_order(self, order_id: str) -> Order:
        blob = await self.storage.get(self.record_key(order_id))
        if blob is None:
            raise NotFoundError(f"Order {order_id} not found")
        try:
            return Order.from_record(blob.data)
        except (SchemaError, ValueError) as e:
            logger.error("order_record_unreadable", order_id=order_id, error=str(e))
            raise StorageError(f"Order {order_id} could not be read") from e

    async def get_all_orders(self) -> List[Order]:
        keys = await self.storage.list(self.RECORD_PREFIX)
        orders = []
        skipped = 0
        read_errors = []
        for key in keys:
            try:
                blob = await self.storage.get(key)
            except StorageError as e:
                read_errors.append(e)
                logger.debug("order_record_read_failed", key=key, error=str(e))
                continue
            if blob is None:
                # Deleted between list and get
                continue
            try:
                orders.append(Order.from_record(blob.data))
            except (SchemaError, ValueError) as e:
                skipped += 1
                logger.debug("order_record_skipped", key=key, error=str(e))
        if read_errors and len(read_errors) == len(keys):
            # Every read failed
            raise read_errors[-1]
        skipped += len(read_errors)
        if skipped:
            ecomm_corrupt_records_skipped_total.inc(skipped)
            logger.warning("order_records_skipped", skipped=skipped, returned=len(orders))
        return orders

    async def add_payment_proof(self, order_id: str, proof: Attachment) -> Order:
        order = await self.get_order(order_id)
        # Fixed key: a re-submitted proof replaces the previous file
        key = self.attachment_key(order_id, self.PAYMENT_PROOF)
        locator = await self.storage.upload(key, proof.data, proof.content_type)
        updated = order.model_copy(update={"payment_proof": locator})
        await self.save(updated)
        logger.info("payment_proof_stored", order_id=order_id)
        return updated

    async def mark_processed(self, order_id: str) -> Order:
        order = await self.get_order(order_id)
        if order.is_processed:
            return order
        updated = order.model_copy(update={"is_processed": True})
        await self.save(updated)
        logger.info("order_marked_processed", order_id=order_id)
        return updated
