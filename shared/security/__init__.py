from .jwt_handler import create_access_token, create_admin_token, verify_access_token
from .api_key import verify_api_key
from .admin import (
    ADMIN_ROLE,
    AdminAuthenticator,
    ApiKeyAdminAuthenticator,
    JWTAdminAuthenticator,
    get_admin_authenticator,
)
from .attachment_links import sign_attachment_key, verify_attachment_link
from .dependencies import require_admin
from .rate_limiter import limiter

__all__ = [
    "create_access_token",
    "create_admin_token",
    "verify_access_token",
    "verify_api_key",
    "ADMIN_ROLE",
    "AdminAuthenticator",
    "ApiKeyAdminAuthenticator",
    "JWTAdminAuthenticator",
    "get_admin_authenticator",
    "require_admin",
    "sign_attachment_key",
    "verify_attachment_link",
    "limiter",
]
