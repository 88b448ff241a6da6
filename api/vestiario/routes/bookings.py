"""Booking routes: create, list, pay, confirm, cancel.

Creation runs every booking rule, then claims the covered hours. Status
changes go through the state machine in services.transitions.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import get_active_court, get_current_account, require_owner, require_player
from vestiario.models.account import Account
from vestiario.models.booking import Booking, BookingStatus
from vestiario.schemas import BookingCreate, BookingOut, PaymentOut, PaymentRequest
from vestiario.services.booking_rules import SlotTaken, calc_end_time, claim_slots, release_slots, validate_booking
from vestiario.services.notifications import notify_owner_cancellation, notify_owner_new_booking
from vestiario.services.payment import CardDetails, process_payment
from vestiario.services.pricing import calculate_total_price
from vestiario.services.transitions import InvalidTransition, can_transition, transition

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


async def _get_booking(db: AsyncSession, booking_id: int) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


def _apply(booking: Booking, target: BookingStatus, actor_id: int) -> None:
    try:
        transition(booking, target, actor_id=actor_id)
    except InvalidTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None


@router.post("", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    player: Account = Depends(require_player),
    db: AsyncSession = Depends(get_db),
):
    court = await get_active_court(body.court_id, db)

    # Run all booking rules
    violations = await validate_booking(
        db=db,
        court=court,
        booking_date=body.booking_date,
        start_time=body.start_time,
        duration_hours=body.duration_hours,
    )

    if violations:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[{"rule": v.rule, "message": v.message} for v in violations],
        )

    booking = Booking(
        court=court,
        player=player,
        booking_date=body.booking_date,
        start_time=body.start_time,
        end_time=calc_end_time(body.start_time, body.duration_hours),
        duration_hours=body.duration_hours,
        status=BookingStatus.PENDING,
        total_price=calculate_total_price(court.hourly_rate, body.duration_hours),
        sport=body.sport or court.sport,
        players=body.players,
        notes=body.notes,
    )
    db.add(booking)
    await db.flush()

    try:
        await claim_slots(db, booking)
    except SlotTaken as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None

    logger.info(
        "Player %s booked court %s on %s %s (%sh, %s)",
        player.id,
        court.id,
        booking.booking_date,
        booking.start_time,
        booking.duration_hours,
        booking.total_price,
    )
    return booking


@router.get("", response_model=list[BookingOut])
async def list_my_bookings(
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Booking)
        .where(Booking.player_id == account.id)
        .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
        .limit(50)
    )
    return result.scalars().all()


@router.post("/{booking_id}/pay", response_model=PaymentOut)
async def pay_booking(
    booking_id: int,
    body: PaymentRequest,
    player: Account = Depends(require_player),
    db: AsyncSession = Depends(get_db),
):
    """Charge the booking's price to a card. A declined card leaves the booking pending."""
    booking = await _get_booking(db, booking_id)
    if booking.player_id != player.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    current = BookingStatus(booking.status)
    if not can_transition(current, BookingStatus.CONFIRMED):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=f"Booking is {current.value} and cannot be paid."
        )

    card = CardDetails(number=body.card_number, holder_name=body.holder_name, expiry=body.expiry, cvv=body.cvv)
    result = process_payment(booking.total_price, card)

    if result.success:
        booking.payment_receipt_id = result.receipt_id
        _apply(booking, BookingStatus.CONFIRMED, player.id)
        notify_owner_new_booking(db, booking)
        await db.flush()

    return PaymentOut(
        success=result.success,
        receipt_id=result.receipt_id,
        message=result.message,
        booking=BookingOut.model_validate(booking),
    )


@router.post("/{booking_id}/confirm", response_model=BookingOut)
async def confirm_booking(
    booking_id: int,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    booking = await _get_booking(db, booking_id)
    if booking.court.owner_id != owner.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not own this court")

    _apply(booking, BookingStatus.CONFIRMED, owner.id)
    await db.flush()
    return booking


@router.post("/{booking_id}/cancel", response_model=BookingOut)
async def cancel_booking(
    booking_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    """Cancel as the player who booked or as the owner of the court."""
    booking = await _get_booking(db, booking_id)
    is_player = booking.player_id == account.id
    is_owner = booking.court.owner_id == account.id
    if not (is_player or is_owner):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    _apply(booking, BookingStatus.CANCELLED, account.id)
    await release_slots(db, booking)
    if is_player and not is_owner:
        notify_owner_cancellation(db, booking)
    await db.flush()
    return booking
