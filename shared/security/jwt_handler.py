import os
import warnings
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
if not SECRET_KEY:
    # No signing key: no token is issued or accepted
    warnings.warn(
        "JWT_SECRET_KEY is not set. Token authentication is disabled. "
        "Set this env var in production!",
        stacklevel=2,
    )

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """Creates a JWT access token with a UTC expiration."""
    if not SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY is not set; cannot issue tokens.")
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def verify_access_token(token: str) -> dict | None:
    """Decodes and verifies the JWT. Returns payload if valid, None if invalid/expired."""
    if not SECRET_KEY:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None

def create_admin_token(subject: str, expires_delta: timedelta = None) -> str:
    """Token accepted by the admin panel routes (role claim 'admin')."""
    return create_access_token({"sub": subject, "role": ADMIN_ROLE}, expires_delta)
