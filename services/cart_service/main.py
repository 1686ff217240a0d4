from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter
from .router import router

cart_app = FastAPI(title="Cart Analysis Service", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(cart_app, "cart_service")
register_exception_handlers(cart_app)

# --- SECURITY SETUP ---
cart_app.state.limiter = limiter
cart_app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

cart_app.include_router(router)
