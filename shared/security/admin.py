"""
Admin authentication is a replaceable collaborator: routers only ask an
AdminAuthenticator whether the presented credentials belong to an admin.
Swap the implementation via ADMIN_AUTH_MODE or a FastAPI dependency override.
"""
from typing import Optional

from shared.config import settings

from .api_key import verify_api_key
from .jwt_handler import ADMIN_ROLE, verify_access_token


class AdminAuthenticator:
    def authenticate(self, token: Optional[str], api_key: Optional[str]) -> Optional[str]:
        """Return the admin's identity, or None if the credentials are not an admin's."""
        raise NotImplementedError


class JWTAdminAuthenticator(AdminAuthenticator):
    """Bearer tokens signed with JWT_SECRET_KEY whose 'role' claim is 'admin'.
    Tokens are issued by whatever identity provider shares the secret."""

    def authenticate(self, token, api_key):
        if not token:
            return None
        payload = verify_access_token(token)
        if payload is None or payload.get("role") != ADMIN_ROLE:
            return None
        return payload.get("sub")


class ApiKeyAdminAuthenticator(AdminAuthenticator):
    def __init__(self, expected_key: str = None):
        self.expected_key = expected_key

    def authenticate(self, token, api_key):
        if not verify_api_key(api_key, self.expected_key):
            return None
        return "api-key-admin"


def get_admin_authenticator() -> AdminAuthenticator:
    if settings.ADMIN_AUTH_MODE == "api_key":
        return ApiKeyAdminAuthenticator()
    return JWTAdminAuthenticator()
