"""
Period arithmetic for goals and activity entries.

Commission targets are stored only as an annual figure. The quarterly and
monthly figures are derived here on every read:

    quarterly = round(annual / 4)
    monthly   = round(annual / 12)

Rounding is to the nearest whole unit with ties away from zero
(ROUND_HALF_UP on Decimal), e.g. 100 / 12 = 8.33 -> 8 and 30 / 4 = 7.5 -> 8.
"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Tuple, Union

WHOLE = Decimal("1")


class PeriodTargets(NamedTuple):
    quarterly: Decimal
    monthly: Decimal


def _to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging in binary noise
    return Decimal(str(value))


def derive_targets(annual: Union[Decimal, int, float, str]) -> PeriodTargets:
    """Derive quarterly and monthly targets from an annual target.

    Negative values are passed through; rejecting them is up to the caller.
    """
    annual = _to_decimal(annual)
    quarterly = (annual / 4).quantize(WHOLE, rounding=ROUND_HALF_UP)
    monthly = (annual / 12).quantize(WHOLE, rounding=ROUND_HALF_UP)
    return PeriodTargets(quarterly=quarterly, monthly=monthly)


def current_period(today: Optional[date] = None) -> Tuple[int, int]:
    """(year, month) for the given day, or for today."""
    today = today or date.today()
    return today.year, today.month


def week_start_monday(for_date: Optional[date] = None) -> date:
    """Get the Monday of the week for a given date (or current week if None)."""
    target = for_date or date.today()
    # weekday() returns 0 for Monday, 6 for Sunday
    return target - timedelta(days=target.weekday())


def week_bounds(week_start: date) -> Tuple[date, date]:
    """Start and end (six days later) of the week beginning on week_start."""
    return week_start, week_start + timedelta(days=6)
