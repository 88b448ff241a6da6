"""Booking status state machine.

    [create] -> pending
    pending   -> confirmed   (owner confirms, or payment succeeds)
    pending   -> cancelled   (player or owner)
    confirmed -> cancelled   (player or owner)

cancelled is terminal and nothing returns to pending.
"""

import logging
from datetime import UTC, datetime

from vestiario.models.booking import Booking, BookingStatus

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}


class InvalidTransition(Exception):
    """Raised when a booking cannot move to the requested status."""

    def __init__(self, current: BookingStatus, target: BookingStatus):
        self.current = current
        self.target = target
        super().__init__(f"Booking is {current.value} and cannot become {target.value}.")


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(booking: Booking, target: BookingStatus, actor_id: int | None = None) -> Booking:
    """Move a booking to `target`, stamping cancellation details. Raises InvalidTransition."""
    current = BookingStatus(booking.status)
    if not can_transition(current, target):
        raise InvalidTransition(current, target)

    booking.status = target
    if target == BookingStatus.CANCELLED:
        booking.cancelled_at = datetime.now(UTC)
        booking.cancelled_by = actor_id

    logger.info("Booking %s: %s -> %s (actor=%s)", booking.id, current.value, target.value, actor_id)
    return booking
