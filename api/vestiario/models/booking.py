"""Booking models.

A booking reserves a court for a player on a date from a start hour to an end hour.
A blocked slot withdraws one hour of a court from sale (maintenance, events, ...).
A slot claim is the write-side guard against double booking: one row per court,
date and hour held by a live booking, unique on that key.
"""

import enum
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vestiario.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from vestiario.models.account import Account
    from vestiario.models.venue import Court


class BookingStatus(enum.StrEnum):
    PENDING = "pending"  # created by the player, awaiting owner or payment
    CONFIRMED = "confirmed"  # owner accepted or payment succeeded
    CANCELLED = "cancelled"  # by player or owner, terminal


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id"), nullable=False)
    player_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    # When
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    # Status
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", values_callable=lambda e: [x.value for x in e]),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    cancelled_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"))

    # Price is fixed when the booking is made
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_receipt_id: Mapped[str | None] = mapped_column(String(100))

    # Details
    sport: Mapped[str] = mapped_column(String(100), nullable=False)
    players: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    court: Mapped["Court"] = relationship(lazy="selectin")
    player: Mapped["Account"] = relationship(foreign_keys=[player_id], lazy="selectin")

    __table_args__ = (
        Index("ix_bookings_court_date", "court_id", "booking_date"),
        Index("ix_bookings_player", "player_id", "booking_date"),
    )

    @property
    def court_name(self) -> str:
        return self.court.name

    @property
    def player_name(self) -> str:
        return self.player.full_name

    @property
    def hours(self) -> list[int]:
        """Wall-clock hours this booking occupies, e.g. 14:00-16:00 -> [14, 15]."""
        return list(range(self.start_time.hour, self.start_time.hour + self.duration_hours))

    def __repr__(self) -> str:
        return f"<Booking {self.booking_date} {self.start_time}-{self.end_time} court={self.court_id} {self.status}>"


class SlotClaim(Base):
    __tablename__ = "slot_claims"

    id: Mapped[int] = mapped_column(primary_key=True)
    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id"), nullable=False)
    slot_date: Mapped[date] = mapped_column(Date, nullable=False)
    slot_hour: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        # Two writers racing for the same hour: the second insert fails here
        Index("ix_slot_claims_unique", "court_id", "slot_date", "slot_hour", unique=True),
    )

    def __repr__(self) -> str:
        return f"<SlotClaim court={self.court_id} {self.slot_date} {self.slot_hour:02d}:00>"


class BlockedSlot(TimestampMixin, Base):
    __tablename__ = "blocked_slots"

    id: Mapped[int] = mapped_column(primary_key=True)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id"), nullable=False)
    slot_date: Mapped[date] = mapped_column(Date, nullable=False)
    slot_time: Mapped[time] = mapped_column(Time, nullable=False)  # always on the hour
    reason: Mapped[str] = mapped_column(Text, default="Blocked", nullable=False)

    __table_args__ = (Index("ix_blocked_slots_unique", "court_id", "slot_date", "slot_time", unique=True),)

    def __repr__(self) -> str:
        return f"<BlockedSlot court={self.court_id} {self.slot_date} {self.slot_time}>"
