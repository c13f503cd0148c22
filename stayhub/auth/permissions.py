"""Role and ownership checks invoked explicitly at the API boundary.

Routers call these after authentication and before any service code runs;
there is no global permission registry.
"""

from fastapi import HTTPException, status

from stayhub.models.booking import Booking
from stayhub.models.user import ROLE_OWNER, ROLE_USER, User

PROPERTIES_MANAGE = "properties-manage"
BOOKINGS_MANAGE = "bookings-manage"

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    ROLE_OWNER: frozenset({PROPERTIES_MANAGE}),
    ROLE_USER: frozenset({BOOKINGS_MANAGE}),
}


def is_allowed(user: User, action: str) -> bool:
    return action in ROLE_PERMISSIONS.get(user.role, frozenset())


def ensure_allowed(user: User, action: str) -> None:
    """Raise 403 unless the user's role grants ``action``."""
    if not is_allowed(user, action):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This action is unauthorized")


def ensure_owns_booking(user: User, booking: Booking) -> None:
    """Only the guest who made a booking may view, rate or cancel it."""
    if booking.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This action is unauthorized")
