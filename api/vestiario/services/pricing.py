"""Booking price calculation.

Price is the court's hourly rate times the booked duration, in currency
units rounded to two decimal places. Rates are stored as Decimal to avoid
float drift.
"""

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def _combine(t: time) -> datetime:
    """Combine a time with an arbitrary date for arithmetic."""
    return datetime.combine(date.today(), t)


def duration_hours(start_time: time, end_time: time) -> Decimal:
    """Length of [start, end) in hours. Zero or negative spans return 0."""
    seconds = (_combine(end_time) - _combine(start_time)).total_seconds()
    if seconds <= 0:
        return ZERO
    return (Decimal(int(seconds)) / Decimal(3600)).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_total_price(hourly_rate: Decimal | float | int | None, hours: Decimal | float | int | None) -> Decimal:
    """hourly_rate × hours, rounded half-up to cents.

    A missing or non-positive rate or duration gives 0.00; callers treat a zero
    price as a booking that cannot be submitted.
    """
    if not hourly_rate or not hours:
        return ZERO

    rate = Decimal(str(hourly_rate))
    duration = Decimal(str(hours))
    if rate <= 0 or duration <= 0:
        return ZERO

    return (rate * duration).quantize(CENTS, rounding=ROUND_HALF_UP)


def price_for_interval(hourly_rate: Decimal | float | int | None, start_time: time, end_time: time) -> Decimal:
    return calculate_total_price(hourly_rate, duration_hours(start_time, end_time))
