"""Hourly slot availability for a court on a given date.

Pure calculation module: no database, no async, no FastAPI dependencies.
Callers pass in whatever bookings and blocked slots they loaded; anything on
another date is ignored here.

A court day runs from the opening hour to the closing hour inclusive, one
slot per hour (08:00 ... 22:00 by default). Each slot is classified with
this precedence, highest first:

    booked    a booking starts in that hour, or the hour falls strictly
              inside a booking's [start, end)
    blocked   the owner withdrew that hour
    past      the slot has already started (venue clock)
    available otherwise
"""

import enum
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from vestiario.core.config import settings
from vestiario.models.booking import BookingStatus


class SlotStatus(enum.StrEnum):
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"
    PAST = "past"


def venue_now() -> datetime:
    """Current wall-clock time at the venue, as a naive datetime."""
    return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)


def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def booking_covers_hour(booking, hour: int) -> bool:
    """True when the booking starts in `hour` or `hour` lies strictly between its start and end."""
    slot = time(hour, 0)
    return booking.start_time.hour == hour or booking.start_time < slot < booking.end_time


def day_hours(schedules: Iterable, query_date: date) -> tuple[int, int] | None:
    """Return (open_hour, close_hour) for the weekday of query_date, or None if the court is closed.

    A court without a schedule row for that weekday uses the default day.
    """
    weekday = query_date.weekday()
    for row in schedules:
        if row.weekday == weekday:
            if not row.is_open:
                return None
            return row.open_hour, row.close_hour
    return settings.open_hour, settings.close_hour


def resolve_slots(
    query_date: date,
    bookings: Iterable,
    blocked_slots: Iterable,
    *,
    open_hour: int | None = None,
    close_hour: int | None = None,
    now: datetime | None = None,
    include_cancelled: bool | None = None,
) -> list[dict]:
    """Classify every hourly slot of a court day.

    Returns a list of {"time": "HH:00", "status": SlotStatus} ordered by hour,
    one entry per hour in [open_hour, close_hour].

    Cancelled bookings keep their hours booked unless include_cancelled is
    False (defaults to settings.count_cancelled_bookings).
    """
    open_hour = settings.open_hour if open_hour is None else open_hour
    close_hour = settings.close_hour if close_hour is None else close_hour
    now = now or venue_now()
    if include_cancelled is None:
        include_cancelled = settings.count_cancelled_bookings

    day_bookings = [
        b
        for b in bookings
        if b.booking_date == query_date and (include_cancelled or b.status != BookingStatus.CANCELLED)
    ]
    blocked_hours = {b.slot_time.hour for b in blocked_slots if b.slot_date == query_date}

    slots: list[dict] = []
    for hour in range(open_hour, close_hour + 1):
        slot_start = datetime.combine(query_date, time(hour, 0))

        if any(booking_covers_hour(b, hour) for b in day_bookings):
            status = SlotStatus.BOOKED
        elif hour in blocked_hours:
            status = SlotStatus.BLOCKED
        elif slot_start <= now:
            status = SlotStatus.PAST
        else:
            status = SlotStatus.AVAILABLE

        slots.append({"time": format_hour(hour), "status": status})

    return slots


def court_slots(
    court,
    query_date: date,
    bookings: Iterable,
    blocked_slots: Iterable,
    now: datetime | None = None,
) -> list[dict]:
    """resolve_slots() using the court's own opening hours. A closed day has no slots."""
    hours = day_hours(court.schedules, query_date)
    if hours is None:
        return []
    open_hour, close_hour = hours
    return resolve_slots(query_date, bookings, blocked_slots, open_hour=open_hour, close_hour=close_hour, now=now)


def available_times(slots: Sequence[dict]) -> list[str]:
    return [s["time"] for s in slots if s["status"] == SlotStatus.AVAILABLE]


def agenda_slots(
    court,
    query_date: date,
    bookings: Sequence,
    blocked_slots: Sequence,
    now: datetime | None = None,
) -> list[dict]:
    """Owner's view of a court day: court_slots() plus who booked and why a slot is blocked."""
    slots = court_slots(court, query_date, bookings, blocked_slots, now=now)
    include_cancelled = settings.count_cancelled_bookings
    # Live bookings first so a rebooked hour shows the current player
    bookings = sorted(bookings, key=lambda b: b.status == BookingStatus.CANCELLED)

    for slot in slots:
        hour = int(slot["time"][:2])
        slot["booking_id"] = None
        slot["player_name"] = None
        slot["blocked_slot_id"] = None
        slot["reason"] = None

        if slot["status"] == SlotStatus.BOOKED:
            booking = next(
                b
                for b in bookings
                if b.booking_date == query_date
                and (include_cancelled or b.status != BookingStatus.CANCELLED)
                and booking_covers_hour(b, hour)
            )
            slot["booking_id"] = booking.id
            slot["player_name"] = booking.player_name
        elif slot["status"] == SlotStatus.BLOCKED:
            blocked = next(b for b in blocked_slots if b.slot_date == query_date and b.slot_time.hour == hour)
            slot["blocked_slot_id"] = blocked.id
            slot["reason"] = blocked.reason

    return slots
