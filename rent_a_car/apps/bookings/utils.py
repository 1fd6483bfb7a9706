"""
Pricing and date helpers shared by the booking wizard, the confirmation
screen and the live quote endpoint.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Tuple, Union
import math

from django.utils import timezone

DateLike = Union[date, datetime, str, None]

SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value: DateLike) -> Optional[date]:
    """Accept a date, a datetime or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def parse_time(value) -> Optional[time]:
    if isinstance(value, time):
        return value
    if not value:
        return None
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        return None


def combine_datetime(date_value: DateLike, time_value) -> Optional[datetime]:
    """Combine separate date and time inputs into an aware datetime."""
    day = parse_date(date_value)
    moment = parse_time(time_value)
    if day is None or moment is None:
        return None
    return timezone.make_aware(datetime.combine(day, moment))


def calculate_rental_days(pickup_date: DateLike, dropoff_date: DateLike) -> int:
    """
    Billable days between two calendar dates.

    Time of day is ignored. Any rental is at least one day; 0 is returned
    when either date is missing.
    """
    pickup = parse_date(pickup_date)
    dropoff = parse_date(dropoff_date)
    if pickup is None or dropoff is None:
        return 0
    seconds = abs((dropoff - pickup).total_seconds())
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def calculate_rental_cost(
    pickup_date: DateLike,
    dropoff_date: DateLike,
    daily_rate: Union[Decimal, int, float]
) -> Tuple[int, Decimal]:
    """Returns: (total_days, total_cost)"""
    total_days = calculate_rental_days(pickup_date, dropoff_date)
    return total_days, Decimal(str(daily_rate)) * total_days


def format_price(amount) -> str:
    """European formatting with two decimals: 1789.66 -> "1.789,66"."""
    value = Decimal(str(amount or 0)).quantize(Decimal('0.01'))
    return f"{value:,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
