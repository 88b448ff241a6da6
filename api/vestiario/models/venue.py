"""Venue models.

Establishment = an owner's venue (e.g. Arena Centro), grouping one or more courts.
Court = an individual bookable court with an hourly rate.
CourtSchedule = per-weekday opening hours overriding the default 08:00-22:00 day.
Sport = a sport tag courts and bookings refer to.
"""

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vestiario.models.base import Base, TimestampMixin


class Sport(TimestampMixin, Base):
    __tablename__ = "sports"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(20))

    def __repr__(self) -> str:
        return f"<Sport {self.name}>"


class Establishment(TimestampMixin, Base):
    __tablename__ = "establishments"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Contact / location
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"<Establishment {self.name}>"


class Court(TimestampMixin, Base):
    __tablename__ = "courts"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    establishment_id: Mapped[int | None] = mapped_column(ForeignKey("establishments.id"))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sport: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Pricing (currency units, two decimal places)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Court-specific
    is_indoor: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), default=Decimal("0"), nullable=False)  # 0-5
    image_url: Mapped[str | None] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text)

    # Location
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(50))

    # Relationships
    establishment: Mapped["Establishment | None"] = relationship(lazy="selectin")
    schedules: Mapped[list["CourtSchedule"]] = relationship(
        back_populates="court", lazy="selectin", cascade="all, delete-orphan"
    )

    @property
    def establishment_name(self) -> str | None:
        return self.establishment.name if self.establishment else None

    def __repr__(self) -> str:
        return f"<Court {self.name} ({self.sport})>"


class CourtSchedule(TimestampMixin, Base):
    """Opening hours for one weekday of one court. The last slot starts at close_hour."""

    __tablename__ = "court_schedules"

    id: Mapped[int] = mapped_column(primary_key=True)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id", ondelete="CASCADE"), nullable=False)
    weekday: Mapped[int] = mapped_column(Integer, nullable=False)  # 0=Mon..6=Sun
    is_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    open_hour: Mapped[int] = mapped_column(Integer, default=8, nullable=False)
    close_hour: Mapped[int] = mapped_column(Integer, default=22, nullable=False)

    court: Mapped["Court"] = relationship(back_populates="schedules")

    __table_args__ = (Index("ix_court_schedules_court_weekday", "court_id", "weekday", unique=True),)

    def __repr__(self) -> str:
        return f"<CourtSchedule court={self.court_id} weekday={self.weekday}>"
