from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, APIKeyHeader
from .admin import AdminAuthenticator, get_admin_authenticator

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

# Alternative header for deployments using a static admin key
api_key_header = APIKeyHeader(name="X-Admin-API-Key", auto_error=False)

async def require_admin(
    token: str = Depends(oauth2_scheme),
    api_key: str = Depends(api_key_header),
    authenticator: AdminAuthenticator = Depends(get_admin_authenticator),
) -> str:
    """Dependency guarding admin routes. Returns the admin identity."""
    if not token and not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin credentials required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin_id = authenticator.authenticate(token, api_key)
    if admin_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin credentials"
        )
    return admin_id
