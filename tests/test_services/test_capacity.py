"""Unit tests for closest-fit apartment selection."""

from types import SimpleNamespace

from stayhub.services.capacity import fits_party, select_best_apartment, suitable_apartments


def apt(name: str, adults: int, children: int) -> SimpleNamespace:
    return SimpleNamespace(name=name, capacity_adults=adults, capacity_children=children)


SMALL = apt("small", 1, 0)
MEDIUM = apt("medium", 2, 1)
LARGE = apt("large", 3, 2)


class TestSelectBestApartment:
    def test_closest_fit_not_largest(self):
        assert select_best_apartment([LARGE, SMALL, MEDIUM], 2, 1) is MEDIUM

    def test_exact_fit_regardless_of_order(self):
        assert select_best_apartment([MEDIUM, LARGE], 3, 2) is LARGE

    def test_nothing_fits(self):
        assert select_best_apartment([SMALL, MEDIUM], 4, 0) is None

    def test_unavailable_apartment_skipped(self):
        best = select_best_apartment([SMALL, MEDIUM, LARGE], 2, 1, is_available=lambda a: a is not MEDIUM)
        assert best is LARGE

    def test_ties_keep_incoming_order(self):
        first, second = apt("first", 2, 0), apt("second", 2, 0)
        assert select_best_apartment([first, second], 1, 0) is first

    def test_children_only_party(self):
        assert select_best_apartment([SMALL, MEDIUM], 0, 1) is MEDIUM


class TestSuitableApartments:
    def test_sorted_smallest_first(self):
        assert suitable_apartments([LARGE, SMALL, MEDIUM], 1, 0) == [SMALL, MEDIUM, LARGE]

    def test_without_party_size_returns_all(self):
        assert suitable_apartments([LARGE, SMALL], 2, None) == [LARGE, SMALL]
        assert suitable_apartments([LARGE, SMALL], None, None) == [LARGE, SMALL]


def test_fits_party_checks_both_sizes():
    assert fits_party(MEDIUM, 2, 1)
    assert not fits_party(MEDIUM, 2, 2)
    assert not fits_party(MEDIUM, 3, 0)
