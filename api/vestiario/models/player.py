"""Player activity: favorite courts and match history."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from vestiario.models.base import Base, TimestampMixin


class MatchResult(enum.StrEnum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class Favorite(TimestampMixin, Base):
    """A court a player starred, with the court's display fields as they were at that moment."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id", ondelete="CASCADE"), nullable=False)

    # Snapshot
    court_name: Mapped[str] = mapped_column(String(200), nullable=False)
    establishment_name: Mapped[str | None] = mapped_column(String(200))
    sport: Mapped[str] = mapped_column(String(100), nullable=False)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_indoor: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rating: Mapped[Decimal] = mapped_column(Numeric(2, 1), default=Decimal("0"), nullable=False)

    __table_args__ = (Index("ix_favorites_account_court", "account_id", "court_id", unique=True),)

    def __repr__(self) -> str:
        return f"<Favorite account={self.account_id} court={self.court_id}>"


class MatchHistoryEntry(TimestampMixin, Base):
    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    opponent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    sport: Mapped[str] = mapped_column(String(100), nullable=False)
    match_date: Mapped[date] = mapped_column(Date, nullable=False)
    player_score: Mapped[int] = mapped_column(Integer, nullable=False)
    opponent_score: Mapped[int] = mapped_column(Integer, nullable=False)

    @property
    def result(self) -> MatchResult:
        if self.player_score > self.opponent_score:
            return MatchResult.WIN
        if self.player_score < self.opponent_score:
            return MatchResult.LOSS
        return MatchResult.DRAW

    def __repr__(self) -> str:
        return f"<MatchHistoryEntry {self.match_date} vs {self.opponent_name}>"
