"""Court routes: search, owner management, availability, opening hours and blocked slots."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.config import settings
from vestiario.core.database import get_db
from vestiario.core.dependencies import get_active_court, get_owned_court, require_owner
from vestiario.models.account import Account
from vestiario.models.booking import BlockedSlot, Booking
from vestiario.models.venue import Court, CourtSchedule, Establishment
from vestiario.schemas import (
    AvailabilityOut,
    BlockedSlotIn,
    BlockedSlotOut,
    CourtIn,
    CourtOut,
    CourtUpdate,
    CourtWithAvailability,
    ScheduleDayOut,
    ScheduleReplace,
    SlotOut,
)
from vestiario.services.availability import available_times, court_slots
from vestiario.services.booking_rules import load_day
from vestiario.services.search import filter_courts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courts", tags=["courts"])


# ---------------------------------------------------------------------------
# Public endpoints (no auth required)
# ---------------------------------------------------------------------------


@router.get("", response_model=list[CourtOut])
async def list_courts(
    sport: str | None = None,
    location: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Court).where(Court.is_active.is_(True)))
    return filter_courts(result.scalars().all(), sport=sport, location=location)


@router.get("/available", response_model=list[CourtWithAvailability])
async def list_courts_with_availability(
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    sport: str | None = None,
    location: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Courts with at least one bookable slot on the date, each with its free times."""
    result = await db.execute(select(Court).where(Court.is_active.is_(True)))
    courts = filter_courts(result.scalars().all(), sport=sport, location=location)
    court_ids = [c.id for c in courts]

    # Fetch the day's bookings and blocks for all candidate courts in two queries
    bookings_result = await db.execute(
        select(Booking).where(Booking.court_id.in_(court_ids), Booking.booking_date == query_date)
    )
    blocked_result = await db.execute(
        select(BlockedSlot).where(BlockedSlot.court_id.in_(court_ids), BlockedSlot.slot_date == query_date)
    )
    bookings_by_court: dict[int, list[Booking]] = {cid: [] for cid in court_ids}
    for booking in bookings_result.scalars().all():
        bookings_by_court[booking.court_id].append(booking)
    blocked_by_court: dict[int, list[BlockedSlot]] = {cid: [] for cid in court_ids}
    for blocked in blocked_result.scalars().all():
        blocked_by_court[blocked.court_id].append(blocked)

    out = []
    for court in courts:
        slots = court_slots(court, query_date, bookings_by_court[court.id], blocked_by_court[court.id])
        free = available_times(slots)
        if free:
            out.append(
                CourtWithAvailability(
                    **CourtOut.model_validate(court).model_dump(),
                    available_slots=free,
                    total_available_slots=len(free),
                )
            )
    return out


@router.get("/{court_id}", response_model=CourtOut)
async def get_court(court_id: int, db: AsyncSession = Depends(get_db)):
    return await get_active_court(court_id, db)


@router.get("/{court_id}/availability", response_model=AvailabilityOut)
async def get_court_availability(
    court_id: int,
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    db: AsyncSession = Depends(get_db),
):
    """Return every hourly slot of a court on a date with its status.

    Past, booked and blocked slots are included so the frontend can render a
    complete day grid.
    """
    court = await get_active_court(court_id, db)
    bookings, blocked = await load_day(db, court.id, query_date)
    slots = court_slots(court, query_date, bookings, blocked)

    return AvailabilityOut(
        court_id=court.id,
        court_name=court.name,
        hourly_rate=court.hourly_rate,
        date=query_date,
        slots=[SlotOut(**s) for s in slots],
    )


@router.get("/{court_id}/schedule", response_model=list[ScheduleDayOut])
async def get_court_schedule(court_id: int, db: AsyncSession = Depends(get_db)):
    court = await get_active_court(court_id, db)
    return _schedule_out(court)


# ---------------------------------------------------------------------------
# Owner endpoints
# ---------------------------------------------------------------------------


@router.post("", response_model=CourtOut, status_code=status.HTTP_201_CREATED)
async def create_court(
    body: CourtIn,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    est_result = await db.execute(select(Establishment).where(Establishment.owner_id == owner.id))
    establishment = est_result.scalar_one_or_none()

    court = Court(owner_id=owner.id, establishment=establishment, schedules=[], **body.model_dump())
    db.add(court)
    await db.flush()

    logger.info("Owner %s created court %s", owner.id, court.id)
    return court


@router.patch("/{court_id}", response_model=CourtOut)
async def update_court(
    body: CourtUpdate,
    court: Court = Depends(get_owned_court),
    db: AsyncSession = Depends(get_db),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(court, field, value)
    await db.flush()
    return court


@router.delete("/{court_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_court(court: Court = Depends(get_owned_court)):
    # Soft delete: bookings and favorites keep pointing at the row
    court.is_active = False
    logger.info("Court %s deactivated", court.id)


@router.put("/{court_id}/schedule", response_model=list[ScheduleDayOut])
async def replace_court_schedule(
    body: ScheduleReplace,
    court: Court = Depends(get_owned_court),
    db: AsyncSession = Depends(get_db),
):
    """Replace the weekly opening hours. Weekdays left out fall back to the default day."""
    existing = {row.weekday: row for row in court.schedules}
    wanted = {day.weekday: day for day in body.days}

    for weekday, row in existing.items():
        if weekday not in wanted:
            court.schedules.remove(row)

    for weekday, day in wanted.items():
        row = existing.get(weekday)
        if row is None:
            court.schedules.append(CourtSchedule(**day.model_dump()))
        else:
            row.is_open = day.is_open
            row.open_hour = day.open_hour
            row.close_hour = day.close_hour

    await db.flush()
    return _schedule_out(court)


@router.get("/{court_id}/blocked-slots", response_model=list[BlockedSlotOut])
async def list_blocked_slots(
    court: Court = Depends(get_owned_court),
    query_date: date | None = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    stmt = select(BlockedSlot).where(BlockedSlot.court_id == court.id)
    if query_date is not None:
        stmt = stmt.where(BlockedSlot.slot_date == query_date)
    result = await db.execute(stmt.order_by(BlockedSlot.slot_date, BlockedSlot.slot_time))
    return result.scalars().all()


@router.post("/{court_id}/blocked-slots", response_model=BlockedSlotOut, status_code=status.HTTP_201_CREATED)
async def block_slot(
    body: BlockedSlotIn,
    court: Court = Depends(get_owned_court),
    db: AsyncSession = Depends(get_db),
):
    existing = await db.execute(
        select(BlockedSlot).where(
            BlockedSlot.court_id == court.id,
            BlockedSlot.slot_date == body.slot_date,
            BlockedSlot.slot_time == body.slot_time,
        )
    )
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Slot already blocked")

    blocked = BlockedSlot(court_id=court.id, **body.model_dump())
    db.add(blocked)
    await db.flush()

    logger.info("Court %s blocked %s %s: %s", court.id, body.slot_date, body.slot_time, body.reason)
    return blocked


@router.delete("/{court_id}/blocked-slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_slot(
    slot_id: int,
    court: Court = Depends(get_owned_court),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(BlockedSlot).where(BlockedSlot.id == slot_id, BlockedSlot.court_id == court.id))
    blocked = result.scalar_one_or_none()
    if blocked is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blocked slot not found")

    await db.delete(blocked)


def _schedule_out(court: Court) -> list[ScheduleDayOut]:
    rows = {row.weekday: row for row in court.schedules}
    out = []
    for weekday in range(7):
        row = rows.get(weekday)
        if row is None:
            open_hour, close_hour = settings.open_hour, settings.close_hour
            out.append(
                ScheduleDayOut(
                    weekday=weekday, is_open=True, open_hour=open_hour, close_hour=close_hour, is_default=True
                )
            )
        else:
            out.append(
                ScheduleDayOut(
                    weekday=weekday,
                    is_open=row.is_open,
                    open_hour=row.open_hour,
                    close_hour=row.close_hour,
                    is_default=False,
                )
            )
    return out
