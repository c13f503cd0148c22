"""Inclusive date-range overlap, shared by pricing and availability.

Ranges are closed calendar-day intervals. Two ranges overlap when either
contains the other or one of them starts or ends inside the other, which is
the single inequality ``candidate_start <= query_end and candidate_end >=
query_start``. A booking ending on day D therefore does not block a stay
starting on D + 1.
"""

from datetime import date

from sqlalchemy import ColumnElement, and_


def overlaps(query_start: date, query_end: date, candidate_start: date, candidate_end: date) -> bool:
    """Return True if ``[candidate_start, candidate_end]`` intersects ``[query_start, query_end]``."""
    return candidate_start <= query_end and candidate_end >= query_start


def covers(candidate_start: date, candidate_end: date, day: date) -> bool:
    """Return True if the inclusive range contains ``day``."""
    return overlaps(day, day, candidate_start, candidate_end)


def overlap_clause(start_column, end_column, query_start: date, query_end: date) -> ColumnElement[bool]:
    """SQL form of :func:`overlaps` for a model's start/end date columns.

    Usage::

        select(Booking).where(overlap_clause(Booking.start_date, Booking.end_date, start, end))
    """
    return and_(start_column <= query_end, end_column >= query_start)
