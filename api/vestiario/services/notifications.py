"""Owner notifications.

Notifications are written in the same transaction as the booking change that
triggers them, so an owner never hears about a confirmation that rolled back.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.models.booking import Booking
from vestiario.models.notification import Notification

logger = logging.getLogger(__name__)

KIND_NEW_BOOKING = "new_booking"
KIND_BOOKING_CANCELLED = "booking_cancelled"


def notify_owner_new_booking(db: AsyncSession, booking: Booking) -> Notification:
    """Tell the court owner a booking on one of their courts is confirmed."""
    notification = Notification(
        account_id=booking.court.owner_id,
        kind=KIND_NEW_BOOKING,
        title="New booking confirmed",
        message=(
            f"{booking.player_name} booked {booking.court_name} on "
            f"{booking.booking_date:%d/%m/%Y} at {booking.start_time:%H:%M} ({booking.total_price})."
        ),
        booking_id=booking.id,
    )
    db.add(notification)
    logger.info("Owner %s notified of booking %s", booking.court.owner_id, booking.id)
    return notification


def notify_owner_cancellation(db: AsyncSession, booking: Booking) -> Notification:
    """Tell the court owner a player cancelled."""
    notification = Notification(
        account_id=booking.court.owner_id,
        kind=KIND_BOOKING_CANCELLED,
        title="Booking cancelled",
        message=(
            f"{booking.player_name} cancelled {booking.court_name} on "
            f"{booking.booking_date:%d/%m/%Y} at {booking.start_time:%H:%M}."
        ),
        booking_id=booking.id,
    )
    db.add(notification)
    logger.info("Owner %s notified of cancellation %s", booking.court.owner_id, booking.id)
    return notification


async def list_notifications(db: AsyncSession, account_id: int) -> list[Notification]:
    result = await db.execute(
        select(Notification)
        .where(Notification.account_id == account_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return list(result.scalars().all())


async def mark_all_read(db: AsyncSession, account_id: int) -> int:
    """Mark every unread notification of an account as read. Returns how many changed."""
    result = await db.execute(
        update(Notification)
        .where(Notification.account_id == account_id, Notification.is_read.is_(False))
        .values(is_read=True, read_at=datetime.now(UTC))
    )
    return result.rowcount
