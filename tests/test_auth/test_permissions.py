"""Unit tests for role and ownership checks."""

import uuid
from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from stayhub.auth.permissions import (
    BOOKINGS_MANAGE,
    PROPERTIES_MANAGE,
    ensure_allowed,
    ensure_owns_booking,
    is_allowed,
)


def user(role: str) -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), role=role)


@pytest.mark.parametrize(
    "role, action, allowed",
    [
        ("owner", PROPERTIES_MANAGE, True),
        ("owner", BOOKINGS_MANAGE, False),
        ("user", BOOKINGS_MANAGE, True),
        ("user", PROPERTIES_MANAGE, False),
        ("admin", BOOKINGS_MANAGE, False),
    ],
)
def test_role_permissions(role: str, action: str, allowed: bool):
    assert is_allowed(user(role), action) is allowed


def test_ensure_allowed_raises_403():
    with pytest.raises(HTTPException) as excinfo:
        ensure_allowed(user("owner"), BOOKINGS_MANAGE)
    assert excinfo.value.status_code == 403


def test_only_booking_author_passes():
    guest = user("user")
    ensure_owns_booking(guest, SimpleNamespace(user_id=guest.id))
    with pytest.raises(HTTPException) as excinfo:
        ensure_owns_booking(user("user"), SimpleNamespace(user_id=guest.id))
    assert excinfo.value.status_code == 403
