import structlog
from .models import Order
from .saga import SagaOrchestrator

logger = structlog.get_logger(__name__)

# --- ACTIONS ---

async def allocate_order_id(ctx: dict):
    order_id, created_at = await ctx["repository"].allocate_order_id()
    ctx["order_id"] = order_id
    ctx["created_at"] = created_at

async def upload_screenshot(ctx: dict):
    repository, screenshot = ctx["repository"], ctx["screenshot"]
    key = repository.attachment_key(ctx["order_id"], repository.SCREENSHOT)
    ctx["screenshot_url"] = await repository.storage.upload(key, screenshot.data, screenshot.content_type)
    ctx["screenshot_key"] = key

async def write_record(ctx: dict):
    data = ctx["data"]
    order = Order(
        order_id=ctx["order_id"],
        created_at=ctx["created_at"],
        full_name=data.full_name,
        phone=data.phone,
        email=data.email,
        address=data.address,
        store=data.store,
        notes=data.notes or None,
        screenshot=ctx["screenshot_url"],
        payment_proof=None,
        is_processed=False,
    )
    await ctx["repository"].save(order)
    ctx["order"] = order


# --- COMPENSATIONS (Rollbacks) ---

async def rollback_screenshot(ctx: dict):
    key = ctx.get("screenshot_key")
    if key:
        logger.info("removing_orphaned_screenshot", key=key, order_id=ctx.get("order_id"))
        await ctx["repository"].storage.delete(key)


# --- BUILDER FACTORY ---

def build_create_order_saga() -> SagaOrchestrator:
    saga = SagaOrchestrator()
    saga.add_step("allocate_order_id", allocate_order_id, None) # Read-only, no rollback needed
    saga.add_step("upload_screenshot", upload_screenshot, rollback_screenshot)
    saga.add_step("write_record", write_record, None) # Last step; nothing after it can fail
    return saga
