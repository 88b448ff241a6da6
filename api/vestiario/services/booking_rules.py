"""Booking rules enforcement.

All booking validation logic lives here, separate from the route handlers.
Each rule returns a clear error message or None if the rule passes.
The main validate_booking() function runs all rules and collects violations.

Availability is re-checked at write time against fresh rows, and the hours a
booking occupies are then claimed in slot_claims, whose unique key turns a
concurrent double booking into an IntegrityError instead of a silent overlap.
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.config import settings
from vestiario.models.booking import BlockedSlot, Booking, SlotClaim
from vestiario.models.venue import Court
from vestiario.services.availability import SlotStatus, day_hours, format_hour, resolve_slots, venue_now
from vestiario.services.pricing import calculate_total_price

logger = logging.getLogger(__name__)


class BookingViolation(Exception):
    """Raised when a booking rule is violated."""

    def __init__(self, rule: str, message: str):
        self.rule = rule
        self.message = message
        super().__init__(message)


class SlotTaken(Exception):
    """Another booking claimed one of the requested hours first."""


def _fmt_duration(hours: int) -> str:
    """1 -> "1 hour", 3 -> "3 hours"."""
    return f"{hours} hour{'s' if hours != 1 else ''}"


async def validate_booking(
    db: AsyncSession,
    court: Court,
    booking_date: date,
    start_time: time,
    duration_hours: int,
    now: datetime | None = None,
) -> list[BookingViolation]:
    """Run all booking rules and return a list of violations (empty = valid)."""
    now = now or venue_now()
    violations: list[BookingViolation] = []

    # 1. Duration from the allowed picklist
    v = check_duration(duration_hours)
    if v:
        violations.append(v)

    # 2. Whole hours only
    v = check_on_the_hour(start_time)
    if v:
        violations.append(v)

    # 3. Inside the court's opening hours
    v = check_opening_hours(court, booking_date, start_time, duration_hours)
    if v:
        violations.append(v)

    # 4. Not in the past
    v = check_not_in_past(booking_date, start_time, now)
    if v:
        violations.append(v)

    # 5. Every covered hour still available (bookings and blocked slots)
    if not violations:
        v = await check_slot_conflict(db, court.id, booking_date, start_time.hour, duration_hours)
        if v:
            violations.append(v)

    # 6. Something to charge
    v = check_price(court, duration_hours)
    if v:
        violations.append(v)

    return violations


def check_duration(duration_hours: int) -> BookingViolation | None:
    """Booking duration must be one of the offered lengths."""
    allowed = settings.booking_durations_hours
    if duration_hours not in allowed:
        return BookingViolation(
            "duration",
            f"Duration {_fmt_duration(duration_hours)} not allowed. "
            f"Choose from: {', '.join(_fmt_duration(d) for d in allowed)}.",
        )
    return None


def check_on_the_hour(start_time: time) -> BookingViolation | None:
    if start_time.minute or start_time.second or start_time.microsecond:
        return BookingViolation("start_time", "Bookings start on the hour (e.g. 14:00).")
    return None


def check_opening_hours(
    court: Court, booking_date: date, start_time: time, duration_hours: int
) -> BookingViolation | None:
    """The whole booking must fit between the first slot and the end of the last slot."""
    hours = day_hours(court.schedules, booking_date)
    if hours is None:
        return BookingViolation("closed", f"{court.name} is closed on {booking_date:%A}.")

    open_hour, close_hour = hours
    end_hour = start_time.hour + duration_hours
    if start_time.hour < open_hour or end_hour > close_hour + 1:
        return BookingViolation(
            "opening_hours",
            f"{court.name} takes bookings from {format_hour(open_hour)} to {format_hour(close_hour + 1)} "
            f"on {booking_date:%A}.",
        )
    return None


def check_not_in_past(booking_date: date, start_time: time, now: datetime) -> BookingViolation | None:
    """Cannot book a slot that has already started."""
    slot_start = datetime.combine(booking_date, start_time)

    if slot_start <= now:
        return BookingViolation("past_booking", "Cannot book a slot in the past.")

    return None


async def check_slot_conflict(
    db: AsyncSession,
    court_id: int,
    booking_date: date,
    start_hour: int,
    duration_hours: int,
) -> BookingViolation | None:
    """No covered hour may be booked or blocked, judged by the same resolver the calendar uses."""
    bookings, blocked = await load_day(db, court_id, booking_date)

    slots = resolve_slots(
        booking_date,
        bookings,
        blocked,
        open_hour=start_hour,
        close_hour=start_hour + duration_hours - 1,
        now=datetime.min,  # past-ness is check_not_in_past's job
    )
    taken = [s for s in slots if s["status"] != SlotStatus.AVAILABLE]
    if taken:
        detail = ", ".join(f"{s['time']} ({s['status'].value})" for s in taken)
        return BookingViolation("slot_unavailable", f"Selected slot unavailable: {detail}.")

    return None


def check_price(court: Court, duration_hours: int) -> BookingViolation | None:
    if calculate_total_price(court.hourly_rate, duration_hours) <= 0:
        return BookingViolation("price", "This court has no hourly rate set and cannot be booked.")
    return None


async def load_day(db: AsyncSession, court_id: int, booking_date: date) -> tuple[list[Booking], list[BlockedSlot]]:
    """Fetch the bookings and blocked slots of one court on one date."""
    bookings_result = await db.execute(
        select(Booking).where(Booking.court_id == court_id, Booking.booking_date == booking_date)
    )
    blocked_result = await db.execute(
        select(BlockedSlot).where(BlockedSlot.court_id == court_id, BlockedSlot.slot_date == booking_date)
    )
    return list(bookings_result.scalars().all()), list(blocked_result.scalars().all())


async def claim_slots(db: AsyncSession, booking: Booking) -> None:
    """Insert one slot claim per booked hour. Raises SlotTaken if another booking holds any of them."""
    db.add_all(
        SlotClaim(booking_id=booking.id, court_id=booking.court_id, slot_date=booking.booking_date, slot_hour=hour)
        for hour in booking.hours
    )
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.warning(
            "Slot claim collision on court %s %s hours %s", booking.court_id, booking.booking_date, booking.hours
        )
        raise SlotTaken(f"Another booking took {booking.booking_date} {booking.start_time:%H:%M} first.") from exc


async def release_slots(db: AsyncSession, booking: Booking) -> None:
    """Drop the claims of a cancelled booking so its hours can be claimed again."""
    await db.execute(delete(SlotClaim).where(SlotClaim.booking_id == booking.id))


def calc_end_time(start_time: time, duration_hours: int) -> time:
    """Calculate end time from start time and duration."""
    start_dt = datetime.combine(date.today(), start_time)
    end_dt = start_dt + timedelta(hours=duration_hours)
    return end_dt.time()
