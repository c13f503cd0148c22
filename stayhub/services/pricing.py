"""Stay pricing from per-day price periods."""

import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.apartment import Apartment, ApartmentPrice
from stayhub.services.errors import NotFoundError
from stayhub.services.intervals import covers, overlap_clause

logger = logging.getLogger(__name__)


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _period_fields(period: Any) -> tuple[date, date, int]:
    """Read (start, end, price) from an ORM row or a plain mapping."""
    if isinstance(period, Mapping):
        return _as_date(period["start_date"]), _as_date(period["end_date"]), int(period["price"])
    return _as_date(period.start_date), _as_date(period.end_date), int(period.price)


def default_stay_dates(today: date | None = None) -> tuple[date, date]:
    """Tomorrow and the day after, used when a search carries no dates."""
    today = today or date.today()
    return today + timedelta(days=1), today + timedelta(days=2)


def calculate_price(periods: Iterable[Any], start_date: date | str, end_date: date | str) -> int:
    """Total cost of the inclusive stay ``[start_date, end_date]``.

    Every calendar day is charged the sum of the prices of all periods that
    cover it, so overlapping periods add up and uncovered days cost nothing.
    A one-day stay (``start_date == end_date``) is charged one day. Bounds
    out of order produce 0.
    """
    start = _as_date(start_date)
    end = _as_date(end_date)
    ranges = [_period_fields(period) for period in periods]

    cost = 0
    day = start
    while day <= end:
        cost += sum(price for period_start, period_end, price in ranges if covers(period_start, period_end, day))
        day += timedelta(days=1)
    return cost


async def load_prices_for_range(
    db: AsyncSession,
    apartment_ids: Iterable[uuid.UUID],
    start_date: date,
    end_date: date,
) -> dict[uuid.UUID, list[ApartmentPrice]]:
    """Batch-load the price periods touching a date range, grouped by apartment."""
    ids = list(apartment_ids)
    grouped: dict[uuid.UUID, list[ApartmentPrice]] = {apartment_id: [] for apartment_id in ids}
    if not ids:
        return grouped

    result = await db.execute(
        select(ApartmentPrice)
        .where(
            ApartmentPrice.apartment_id.in_(ids),
            overlap_clause(ApartmentPrice.start_date, ApartmentPrice.end_date, start_date, end_date),
        )
        .order_by(ApartmentPrice.start_date)
    )
    for price in result.scalars().all():
        grouped[price.apartment_id].append(price)
    return grouped


async def compute_apartment_price(
    db: AsyncSession,
    apartment_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> int:
    """Price an apartment for an inclusive stay from its stored periods.

    Raises:
        NotFoundError: If the apartment does not exist.
    """
    exists = await db.scalar(select(Apartment.id).where(Apartment.id == apartment_id))
    if exists is None:
        raise NotFoundError("Apartment", apartment_id)

    prices = await load_prices_for_range(db, [apartment_id], start_date, end_date)
    total = calculate_price(prices[apartment_id], start_date, end_date)
    logger.debug("Priced apartment %s for %s..%s: %s", apartment_id, start_date, end_date, total)
    return total
