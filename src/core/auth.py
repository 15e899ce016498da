"""
Domain-based authorization check.
"""

import logging

from core.config import AUTHORIZED_DOMAIN

log = logging.getLogger(__name__)


def is_authorized(email: str | None, domain: str = AUTHORIZED_DOMAIN) -> bool:
    """
    Check whether a user belongs to the authorized e-mail domain.

    A missing identity, or any failure while inspecting it, means
    not authorized.
    """
    try:
        if not email:
            return False
        return email.strip().lower().endswith("@" + domain.strip().lower())
    except Exception:
        # Keep identity details out of the log
        log.error("Authorization check failed")
        return False
