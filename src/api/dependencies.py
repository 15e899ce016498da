"""FastAPI dependencies for caller identity and shared resources."""

from fastapi import Header

from core.cache import CacheStore, get_cache_store
from core.config import USER_EMAIL_HEADER


async def get_user_email(
    user_email: str | None = Header(None, alias=USER_EMAIL_HEADER),
) -> str | None:
    """
    Caller e-mail as asserted by the identity-aware proxy.

    A missing header is not an error here; the calendar service treats an
    absent identity as unauthorized.
    """
    if user_email is None:
        return None
    # IAP-style headers carry a provider prefix ("accounts.google.com:user@x")
    return user_email.rsplit(":", 1)[-1].strip() or None


def get_cache() -> CacheStore:
    """Process-wide lookup cache."""
    return get_cache_store()
