"""Closest-fit apartment selection for a party of guests."""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

A = TypeVar("A")


def fits_party(apartment: Any, adults: int, children: int) -> bool:
    return apartment.capacity_adults >= adults and apartment.capacity_children >= children


def capacity_key(apartment: Any) -> tuple[int, int]:
    return apartment.capacity_adults, apartment.capacity_children


def suitable_apartments(
    apartments: Iterable[A],
    adults: int | None,
    children: int | None,
    is_available: Callable[[A], bool] | None = None,
) -> list[A]:
    """Apartments that fit the party, smallest capacity first.

    Without both party sizes the list is returned unchanged.
    """
    candidates = list(apartments)
    if adults is None or children is None:
        return candidates

    fitting = [
        apartment
        for apartment in candidates
        if fits_party(apartment, adults, children) and (is_available is None or is_available(apartment))
    ]
    # sorted() is stable: equal capacities keep their incoming order
    return sorted(fitting, key=capacity_key)


def select_best_apartment(
    apartments: Iterable[A],
    adults: int,
    children: int,
    is_available: Callable[[A], bool] | None = None,
) -> A | None:
    """Pick the smallest apartment that still fits ``adults`` and ``children``.

    A party of two adults gets the two-adult apartment rather than a six
    person one. ``is_available`` drops apartments booked for the requested
    dates. Returns None when nothing fits.
    """
    ranked = suitable_apartments(apartments, adults, children, is_available)
    return ranked[0] if ranked else None
