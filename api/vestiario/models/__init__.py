"""All models imported here so Base.metadata knows every table."""

from vestiario.models.account import Account, AccountRole
from vestiario.models.base import Base
from vestiario.models.booking import BlockedSlot, Booking, BookingStatus, SlotClaim
from vestiario.models.notification import Notification
from vestiario.models.player import Favorite, MatchHistoryEntry, MatchResult
from vestiario.models.venue import Court, CourtSchedule, Establishment, Sport

__all__ = [
    "Base",
    "Account",
    "AccountRole",
    "Sport",
    "Establishment",
    "Court",
    "CourtSchedule",
    "Booking",
    "BookingStatus",
    "SlotClaim",
    "BlockedSlot",
    "Favorite",
    "MatchHistoryEntry",
    "MatchResult",
    "Notification",
]
