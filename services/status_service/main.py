from fastapi import FastAPI
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.storage import get_storage
from .router import router, public_router
from .service import get_status_view

status_app = FastAPI(title="Service Status", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(status_app, "status_service")
register_exception_handlers(status_app)

status_app.include_router(public_router)
status_app.include_router(router)

@status_app.on_event("startup")
async def startup_event():
    await get_storage().open()
    await get_status_view().load()
