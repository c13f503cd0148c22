"""Shared API dependencies: single import point for all routers.

Re-exports the database session, authentication and permission helpers so
router modules can import everything they need from one place::

    from stayhub.api.deps import get_db, get_current_user, ensure_allowed
"""

from stayhub.auth.dependencies import get_current_user
from stayhub.auth.permissions import (
    BOOKINGS_MANAGE,
    PROPERTIES_MANAGE,
    ensure_allowed,
    ensure_owns_booking,
)
from stayhub.database import get_db

__all__ = [
    "get_db",
    "get_current_user",
    "ensure_allowed",
    "ensure_owns_booking",
    "BOOKINGS_MANAGE",
    "PROPERTIES_MANAGE",
]
