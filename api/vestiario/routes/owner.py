"""Owner dashboard: bookings on my courts, statistics, day agenda."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import require_owner
from vestiario.models.account import Account
from vestiario.models.booking import BlockedSlot, Booking, BookingStatus
from vestiario.models.venue import Court
from vestiario.schemas import AgendaOut, AgendaSlotOut, BookingOut, CourtAgenda, OwnerStatsOut
from vestiario.services.availability import agenda_slots, venue_now
from vestiario.services.stats import owner_stats

router = APIRouter(prefix="/owner", tags=["owner"])


async def _owner_courts(db: AsyncSession, owner_id: int) -> list[Court]:
    result = await db.execute(
        select(Court).where(Court.owner_id == owner_id, Court.is_active.is_(True)).order_by(Court.name)
    )
    return list(result.scalars().all())


@router.get("/bookings", response_model=list[BookingOut])
async def list_owner_bookings(
    booking_status: BookingStatus | None = Query(None, alias="status"),
    court_id: int | None = None,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    stmt = select(Booking).join(Court, Booking.court_id == Court.id).where(Court.owner_id == owner.id)
    if booking_status is not None:
        stmt = stmt.where(Booking.status == booking_status)
    if court_id is not None:
        stmt = stmt.where(Booking.court_id == court_id)

    result = await db.execute(stmt.order_by(Booking.booking_date.desc(), Booking.start_time.desc()).limit(200))
    return result.scalars().all()


@router.get("/stats", response_model=OwnerStatsOut)
async def get_owner_stats(
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    courts = await _owner_courts(db, owner.id)
    result = await db.execute(
        select(Booking).join(Court, Booking.court_id == Court.id).where(Court.owner_id == owner.id)
    )
    return owner_stats(len(courts), result.scalars().all(), venue_now().date())


@router.get("/schedule", response_model=AgendaOut)
async def get_owner_agenda(
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Every court of the owner on one date, each slot annotated with its booking or block."""
    courts = await _owner_courts(db, owner.id)
    court_ids = [c.id for c in courts]

    bookings_result = await db.execute(
        select(Booking).where(Booking.court_id.in_(court_ids), Booking.booking_date == query_date)
    )
    blocked_result = await db.execute(
        select(BlockedSlot).where(BlockedSlot.court_id.in_(court_ids), BlockedSlot.slot_date == query_date)
    )
    bookings = bookings_result.scalars().all()
    blocked = blocked_result.scalars().all()

    agenda = []
    for court in courts:
        slots = agenda_slots(
            court,
            query_date,
            [b for b in bookings if b.court_id == court.id],
            [s for s in blocked if s.court_id == court.id],
        )
        agenda.append(
            CourtAgenda(court_id=court.id, court_name=court.name, slots=[AgendaSlotOut(**s) for s in slots])
        )

    return AgendaOut(date=query_date, courts=agenda)
