"""Owner dashboard statistics.

Pure aggregation over an owner's courts and the bookings on them.
Revenue counts confirmed bookings only.
"""

from collections.abc import Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from vestiario.models.booking import BookingStatus
from vestiario.services.pricing import CENTS, ZERO

# Occupancy is measured against one confirmed booking per court per day over a 30-day month
OCCUPANCY_DAYS = 30


def owner_stats(court_count: int, bookings: Sequence, today: date) -> dict:
    confirmed = [b for b in bookings if b.status == BookingStatus.CONFIRMED]
    pending = [b for b in bookings if b.status == BookingStatus.PENDING]
    cancelled = [b for b in bookings if b.status == BookingStatus.CANCELLED]

    total_revenue = sum((Decimal(b.total_price) for b in confirmed), ZERO)
    monthly_revenue = sum(
        (
            Decimal(b.total_price)
            for b in confirmed
            if b.booking_date.year == today.year and b.booking_date.month == today.month
        ),
        ZERO,
    )
    average = (total_revenue / len(confirmed)).quantize(CENTS, rounding=ROUND_HALF_UP) if confirmed else ZERO

    occupancy = 0
    if court_count:
        occupancy = min(100, round(len(confirmed) / (court_count * OCCUPANCY_DAYS) * 100))

    return {
        "total_courts": court_count,
        "total_bookings": len(bookings),
        "confirmed_bookings": len(confirmed),
        "pending_bookings": len(pending),
        "cancelled_bookings": len(cancelled),
        "total_revenue": total_revenue.quantize(CENTS),
        "average_booking_value": average,
        "today_bookings": sum(1 for b in bookings if b.booking_date == today),
        "monthly_revenue": monthly_revenue.quantize(CENTS),
        "occupancy_rate": occupancy,
    }
