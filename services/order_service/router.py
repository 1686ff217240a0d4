from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile, status

from shared.attachments import attachment_from_upload
from shared.config import settings
from shared.security import limiter, require_admin, verify_attachment_link
from shared.storage import StorageAdapter, get_storage
from .repository import OrderRepository
from .schemas import OrderResponse, OrderStateResponse, OrderSubmitted, PaymentInstructions
from .service import OrderService, get_order_service

# Admin panel: every route requires admin credentials
router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
public_router = APIRouter()  # Storefront and confirmation screen

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


@public_router.post("/", response_model=OrderSubmitted, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.ORDER_SUBMIT_RATE_LIMIT)
async def submit_order(
    request: Request,                          # REQUIRED: slowapi needs this to check IP/Headers
    full_name: str = Form(..., alias="fullName"),
    phone: str = Form(...),
    email: str = Form(...),
    address: str = Form(...),
    store: str = Form(...),
    notes: Optional[str] = Form(None),
    screenshot: UploadFile = File(...),
    service: OrderService = Depends(get_order_service),
):
    fields = {
        "fullName": full_name,
        "phone": phone,
        "email": email,
        "address": address,
        "store": store,
        "notes": notes,
    }
    order_id = await service.submit_order(fields, await attachment_from_upload(screenshot))
    return OrderSubmitted(
        order_id=order_id,
        payment=PaymentInstructions(
            bank_name=settings.PAYMENT_BANK_NAME,
            account_name=settings.PAYMENT_ACCOUNT_NAME,
            account_number=settings.PAYMENT_ACCOUNT_NUMBER,
            reference=order_id,
        ),
    )


@public_router.post("/{order_id}/payment-proof", response_model=OrderStateResponse)
async def submit_payment_proof(
    order_id: str,
    payment_proof: UploadFile = File(..., alias="paymentProof"),
    service: OrderService = Depends(get_order_service),
):
    order = await service.submit_payment_proof(order_id, await attachment_from_upload(payment_proof))
    return OrderStateResponse.from_order(order)


@public_router.get("/{order_id}/status", response_model=OrderStateResponse)
async def get_order_status(order_id: str, service: OrderService = Depends(get_order_service)):
    return OrderStateResponse.from_order(await service.get_order(order_id))


@router.get("/", response_model=List[OrderResponse])
async def list_orders(
    order: Literal["desc", "asc"] = "desc",
    service: OrderService = Depends(get_order_service),
):
    orders = await service.list_orders(newest_first=(order == "desc"))
    return [OrderResponse.from_order(o) for o in orders]


async def _attachment_response(storage: StorageAdapter, key: str) -> Response:
    if not key or not key.startswith(OrderRepository.ATTACHMENT_PREFIX):
        raise HTTPException(status_code=404, detail="Attachment not found")
    blob = await storage.get(key)
    if blob is None:
        raise HTTPException(status_code=404, detail="Attachment not found")
    return Response(content=blob.data, media_type=blob.content_type)


# Signed links stored as locators by backends that serve attachments through this app
@public_router.get("/attachments/{link}")
async def get_attachment_by_link(link: str, storage: StorageAdapter = Depends(get_storage)):
    return await _attachment_response(storage, verify_attachment_link(link))


@router.get("/attachments/{key:path}")
async def get_attachment(key: str, storage: StorageAdapter = Depends(get_storage)):
    return await _attachment_response(storage, key)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    return OrderResponse.from_order(await service.get_order(order_id))


@router.post("/{order_id}/process", response_model=OrderResponse)
async def mark_order_processed(order_id: str, service: OrderService = Depends(get_order_service)):
    return OrderResponse.from_order(await service.mark_order_processed(order_id))
