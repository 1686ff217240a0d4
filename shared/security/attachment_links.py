"""
Signed links for attachments served by this app (database backend).

A link is a JWT whose subject is the storage key. It carries no expiry
because it is stored in the order record as the attachment locator, and a
browser can follow it without sending admin headers.
"""
from typing import Optional

from jose import JWTError, jwt

from shared.config import settings

from . import jwt_handler

ATTACHMENT_SCOPE = "attachment"


def _signing_key() -> str:
    return settings.ATTACHMENT_SIGNING_KEY or jwt_handler.SECRET_KEY


def sign_attachment_key(key: str) -> str:
    secret = _signing_key()
    if not secret:
        raise RuntimeError("No signing key configured for attachment links.")
    return jwt.encode({"sub": key, "scope": ATTACHMENT_SCOPE}, secret, algorithm=jwt_handler.ALGORITHM)


def verify_attachment_link(link: str) -> Optional[str]:
    """Return the storage key a link grants access to, or None."""
    secret = _signing_key()
    if not secret:
        return None
    try:
        payload = jwt.decode(link, secret, algorithms=[jwt_handler.ALGORITHM])
    except JWTError:
        return None
    # Admin tokens carry no attachment scope and are not links
    if payload.get("scope") != ATTACHMENT_SCOPE:
        return None
    return payload.get("sub")
