"""Unit tests: the availability resolver (pure functions, no DB)."""

from datetime import date, datetime, time
from types import SimpleNamespace

from vestiario.models.booking import BookingStatus
from vestiario.services.availability import (
    SlotStatus,
    agenda_slots,
    available_times,
    booking_covers_hour,
    court_slots,
    day_hours,
    resolve_slots,
)

DAY = date(2030, 3, 15)  # a Friday
EARLY = datetime(2030, 3, 1, 9, 0)  # before DAY, nothing is past


def _booking(start: int, end: int, status=BookingStatus.CONFIRMED, on=DAY, booking_id=1, player="João Silva"):
    return SimpleNamespace(
        id=booking_id,
        booking_date=on,
        start_time=time(start, 0),
        end_time=time(end, 0),
        status=status,
        player_name=player,
    )


def _blocked(hour: int, on=DAY, reason="Blocked", slot_id=1):
    return SimpleNamespace(id=slot_id, slot_date=on, slot_time=time(hour, 0), reason=reason)


def _status_map(slots):
    return {s["time"]: s["status"] for s in slots}


class TestResolveSlots:
    def test_full_day_has_fifteen_hourly_slots(self):
        slots = resolve_slots(DAY, [], [], now=EARLY)
        assert len(slots) == 15
        assert slots[0]["time"] == "08:00"
        assert slots[-1]["time"] == "22:00"
        assert [s["time"] for s in slots] == sorted(s["time"] for s in slots)

    def test_all_available_when_nothing_booked(self):
        slots = resolve_slots(DAY, [], [], now=EARLY)
        assert all(s["status"] == SlotStatus.AVAILABLE for s in slots)

    def test_booking_and_block_example(self):
        # Court at 100/hour, 14:00-16:00 confirmed, 11:00 under maintenance
        slots = resolve_slots(DAY, [_booking(14, 16)], [_blocked(11, reason="Manutenção")], now=EARLY)
        status = _status_map(slots)
        assert status["11:00"] == SlotStatus.BLOCKED
        assert status["14:00"] == SlotStatus.BOOKED
        assert status["15:00"] == SlotStatus.BOOKED
        assert status["16:00"] == SlotStatus.AVAILABLE
        assert status["13:00"] == SlotStatus.AVAILABLE
        others = [t for t in status if t not in ("11:00", "14:00", "15:00")]
        assert all(status[t] == SlotStatus.AVAILABLE for t in others)

    def test_end_hour_is_not_booked(self):
        status = _status_map(resolve_slots(DAY, [_booking(9, 10)], [], now=EARLY))
        assert status["09:00"] == SlotStatus.BOOKED
        assert status["10:00"] == SlotStatus.AVAILABLE

    def test_booked_wins_over_blocked(self):
        status = _status_map(resolve_slots(DAY, [_booking(18, 19)], [_blocked(18)], now=EARLY))
        assert status["18:00"] == SlotStatus.BOOKED

    def test_blocked_wins_over_past(self):
        now = datetime.combine(DAY, time(20, 30))
        status = _status_map(resolve_slots(DAY, [], [_blocked(10)], now=now))
        assert status["10:00"] == SlotStatus.BLOCKED
        assert status["09:00"] == SlotStatus.PAST

    def test_booked_wins_over_past(self):
        now = datetime.combine(DAY, time(20, 30))
        status = _status_map(resolve_slots(DAY, [_booking(8, 9)], [], now=now))
        assert status["08:00"] == SlotStatus.BOOKED

    def test_past_boundary_is_inclusive(self):
        # The slot starting exactly now has already started
        now = datetime.combine(DAY, time(15, 0))
        status = _status_map(resolve_slots(DAY, [], [], now=now))
        assert status["15:00"] == SlotStatus.PAST
        assert status["14:00"] == SlotStatus.PAST
        assert status["16:00"] == SlotStatus.AVAILABLE

    def test_yesterday_is_all_past(self):
        now = datetime.combine(date(2030, 3, 16), time(8, 0))
        slots = resolve_slots(DAY, [], [], now=now)
        assert all(s["status"] == SlotStatus.PAST for s in slots)

    def test_bookings_on_other_dates_ignored(self):
        other = date(2030, 3, 16)
        slots = resolve_slots(DAY, [_booking(10, 12, on=other)], [_blocked(10, on=other)], now=EARLY)
        assert all(s["status"] == SlotStatus.AVAILABLE for s in slots)

    def test_booking_outside_day_has_no_effect(self):
        # A 06:00-08:00 booking ends where the day begins
        status = _status_map(resolve_slots(DAY, [_booking(6, 8)], [], now=EARLY))
        assert status["08:00"] == SlotStatus.AVAILABLE
        assert "06:00" not in status

    def test_cancelled_counts_as_booked_by_default(self):
        status = _status_map(resolve_slots(DAY, [_booking(10, 11, status=BookingStatus.CANCELLED)], [], now=EARLY))
        assert status["10:00"] == SlotStatus.BOOKED

    def test_cancelled_ignored_when_excluded(self):
        bookings = [_booking(10, 11, status=BookingStatus.CANCELLED)]
        status = _status_map(resolve_slots(DAY, bookings, [], now=EARLY, include_cancelled=False))
        assert status["10:00"] == SlotStatus.AVAILABLE

    def test_pending_holds_its_hours(self):
        status = _status_map(resolve_slots(DAY, [_booking(20, 22, status=BookingStatus.PENDING)], [], now=EARLY))
        assert status["20:00"] == SlotStatus.BOOKED
        assert status["21:00"] == SlotStatus.BOOKED
        assert status["22:00"] == SlotStatus.AVAILABLE

    def test_idempotent(self):
        bookings = [_booking(14, 16)]
        blocked = [_blocked(11)]
        assert resolve_slots(DAY, bookings, blocked, now=EARLY) == resolve_slots(DAY, bookings, blocked, now=EARLY)

    def test_custom_window(self):
        slots = resolve_slots(DAY, [], [], open_hour=10, close_hour=12, now=EARLY)
        assert [s["time"] for s in slots] == ["10:00", "11:00", "12:00"]


class TestBookingCoversHour:
    def test_start_hour(self):
        assert booking_covers_hour(_booking(14, 16), 14)

    def test_inside(self):
        assert booking_covers_hour(_booking(14, 17), 16)

    def test_end_hour_excluded(self):
        assert not booking_covers_hour(_booking(14, 16), 16)

    def test_before_start(self):
        assert not booking_covers_hour(_booking(14, 16), 13)


class TestCourtSchedule:
    def test_default_day_without_rows(self):
        assert day_hours([], DAY) == (8, 22)

    def test_row_for_weekday_overrides(self):
        rows = [SimpleNamespace(weekday=DAY.weekday(), is_open=True, open_hour=10, close_hour=18)]
        assert day_hours(rows, DAY) == (10, 18)

    def test_closed_weekday(self):
        rows = [SimpleNamespace(weekday=DAY.weekday(), is_open=False, open_hour=8, close_hour=22)]
        assert day_hours(rows, DAY) is None

    def test_court_slots_uses_court_hours(self):
        court = SimpleNamespace(
            schedules=[SimpleNamespace(weekday=DAY.weekday(), is_open=True, open_hour=18, close_hour=20)]
        )
        slots = court_slots(court, DAY, [], [], now=EARLY)
        assert [s["time"] for s in slots] == ["18:00", "19:00", "20:00"]

    def test_closed_court_has_no_slots(self):
        court = SimpleNamespace(
            schedules=[SimpleNamespace(weekday=DAY.weekday(), is_open=False, open_hour=8, close_hour=22)]
        )
        assert court_slots(court, DAY, [], [], now=EARLY) == []


class TestAgenda:
    def test_available_times(self):
        slots = resolve_slots(DAY, [_booking(8, 21)], [_blocked(21)], now=EARLY)
        assert available_times(slots) == ["22:00"]

    def test_agenda_names_player_and_reason(self):
        court = SimpleNamespace(schedules=[])
        slots = agenda_slots(
            court,
            DAY,
            [_booking(14, 16, booking_id=7)],
            [_blocked(11, reason="Manutenção", slot_id=3)],
            now=EARLY,
        )
        by_time = {s["time"]: s for s in slots}
        assert by_time["14:00"]["booking_id"] == 7
        assert by_time["15:00"]["player_name"] == "João Silva"
        assert by_time["11:00"]["blocked_slot_id"] == 3
        assert by_time["11:00"]["reason"] == "Manutenção"
        assert by_time["12:00"]["booking_id"] is None

    def test_agenda_prefers_live_booking_over_cancelled(self):
        court = SimpleNamespace(schedules=[])
        bookings = [
            _booking(10, 11, status=BookingStatus.CANCELLED, booking_id=1, player="Old"),
            _booking(10, 11, status=BookingStatus.CONFIRMED, booking_id=2, player="New"),
        ]
        slot = next(s for s in agenda_slots(court, DAY, bookings, [], now=EARLY) if s["time"] == "10:00")
        assert slot["booking_id"] == 2
        assert slot["player_name"] == "New"
