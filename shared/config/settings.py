import os
from dotenv import load_dotenv

load_dotenv()

# --- STORAGE ---
# memory | database | blob | kv
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").lower()
STORAGE_TIMEOUT_SECONDS = float(os.getenv("STORAGE_TIMEOUT_SECONDS", "10"))

BLOB_API_URL = os.getenv("BLOB_API_URL", "http://localhost:9000/storage/v1/object/nairabulk")
BLOB_API_TOKEN = os.getenv("BLOB_API_TOKEN", "")
BLOB_PUBLIC_URL = os.getenv("BLOB_PUBLIC_URL", BLOB_API_URL + "/public")

KV_API_URL = os.getenv("KV_API_URL", "http://localhost:9100/kv")
KV_API_TOKEN = os.getenv("KV_API_TOKEN", "")

# Signed-link prefix for backends that serve attachments through this app (database)
ATTACHMENT_URL_PREFIX = os.getenv("ATTACHMENT_URL_PREFIX", "/orders/attachments")
# Falls back to JWT_SECRET_KEY
ATTACHMENT_SIGNING_KEY = os.getenv("ATTACHMENT_SIGNING_KEY", "")

# --- ORDERS ---
ORDER_ID_PREFIX = "NB-"
MAX_ATTACHMENT_MB = int(os.getenv("MAX_ATTACHMENT_MB", "4"))
ALLOWED_ATTACHMENT_TYPES = ("image/png", "image/jpeg", "image/webp")

PAYMENT_BANK_NAME = os.getenv("PAYMENT_BANK_NAME", "GTBank")
PAYMENT_ACCOUNT_NAME = os.getenv("PAYMENT_ACCOUNT_NAME", "NairaBulk Services")
PAYMENT_ACCOUNT_NUMBER = os.getenv("PAYMENT_ACCOUNT_NUMBER", "0123456789")

# --- SECURITY ---
# jwt | api_key
ADMIN_AUTH_MODE = os.getenv("ADMIN_AUTH_MODE", "jwt").lower()
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
ORDER_SUBMIT_RATE_LIMIT = os.getenv("ORDER_SUBMIT_RATE_LIMIT", "5/minute")

# --- OBSERVABILITY ---
OBSERVABILITY_ENABLED = os.getenv("OBSERVABILITY_ENABLED", "true").lower() == "true"
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "http://localhost:4317")

# --- CART ANALYSIS ---
CART_ANALYSIS_MODEL = os.getenv("CART_ANALYSIS_MODEL", "gpt-4o-mini")
