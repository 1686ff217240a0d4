from fastapi import FastAPI

from shared.storage import get_storage

from services.order_service.main import order_app
from services.status_service.main import status_app
from services.status_service.service import get_status_view
from services.cart_service.main import cart_app

app = FastAPI(title="NairaBulk Orders")

# Mounted sub-apps do not receive startup events, so the root app prepares
# storage and reads the service status once for all of them.
@app.on_event("startup")
async def startup_event():
    await get_storage().open()
    await get_status_view().load()

@app.on_event("shutdown")
async def shutdown_event():
    await get_storage().close()

@app.get("/")
async def root():
    return {"status": "ok", "service": "nairabulk-orders"}

app.mount("/orders", order_app)
app.mount("/status", status_app)
app.mount("/cart", cart_app)
