"""
Static admin API key, used when ADMIN_AUTH_MODE=api_key.

A missing ADMIN_API_KEY does not crash start-up, but no key is accepted
until one is configured. A loud warning makes the misconfiguration visible.
"""
import os
import secrets
import warnings

ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "")

if not ADMIN_API_KEY:
    warnings.warn(
        "ADMIN_API_KEY is not set. API-key admin access is disabled. "
        "Set this env var in production!",
        stacklevel=2,
    )


def verify_api_key(provided_key: str, expected_key: str = None) -> bool:
    """Verify an API key using constant-time comparison to prevent timing attacks."""
    expected = expected_key or ADMIN_API_KEY
    if not provided_key or not expected:
        return False
    return secrets.compare_digest(str(provided_key), str(expected))
