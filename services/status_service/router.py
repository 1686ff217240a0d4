from fastapi import APIRouter, Depends
from shared.security.dependencies import require_admin
from .schemas import ServiceStatus
from .service import ServiceStatusView, get_status_view

router = APIRouter(dependencies=[Depends(require_admin)])
public_router = APIRouter()

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "status", "status": "running"}

@public_router.get("/", response_model=ServiceStatus)
async def get_service_status(view: ServiceStatusView = Depends(get_status_view)):
    return ServiceStatus(is_service_open=await view.is_open())

# Optimistic toggle: on a failed write the view is restored and a 503 is returned
@router.put("/", response_model=ServiceStatus)
async def set_service_status(payload: ServiceStatus, view: ServiceStatusView = Depends(get_status_view)):
    return ServiceStatus(is_service_open=await view.set_open(payload.is_service_open))
