"""Pydantic schemas for API serialisation."""

from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from vestiario.models.account import AccountRole
from vestiario.models.player import MatchResult

# --- Auth ---


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=2)
    phone: str | None = None
    role: AccountRole = AccountRole.PLAYER


class RefreshRequest(BaseModel):
    refresh_token: str


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    full_name: str
    phone: str | None
    role: AccountRole


# --- Sports ---


class SportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str | None = None


# --- Establishments ---


class EstablishmentIn(BaseModel):
    name: str = Field(min_length=2)
    description: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None


class EstablishmentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2)
    description: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None


class EstablishmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    description: str | None
    phone: str | None
    address: str | None
    city: str | None
    state: str | None


# --- Courts ---


class CourtIn(BaseModel):
    name: str = Field(min_length=2)
    sport: str
    hourly_rate: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    is_indoor: bool = False
    image_url: str | None = None
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None


class CourtUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2)
    sport: str | None = None
    hourly_rate: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    is_indoor: bool | None = None
    image_url: str | None = None
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None


class CourtOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    establishment_id: int | None
    establishment_name: str | None
    name: str
    sport: str
    hourly_rate: Decimal
    is_indoor: bool
    rating: Decimal
    image_url: str | None
    description: str | None
    address: str | None
    city: str | None
    state: str | None


# --- Schedules ---


class ScheduleDayIn(BaseModel):
    weekday: int = Field(ge=0, le=6)  # 0=Mon..6=Sun
    is_open: bool = True
    open_hour: int = Field(default=8, ge=0, le=22)
    close_hour: int = Field(default=22, ge=0, le=22)  # last slot start

    @model_validator(mode="after")
    def _hours_in_order(self):
        if self.open_hour > self.close_hour:
            raise ValueError("open_hour must not be after close_hour")
        return self


class ScheduleReplace(BaseModel):
    days: list[ScheduleDayIn]

    @field_validator("days")
    @classmethod
    def _one_row_per_weekday(cls, days: list[ScheduleDayIn]) -> list[ScheduleDayIn]:
        weekdays = [d.weekday for d in days]
        if len(weekdays) != len(set(weekdays)):
            raise ValueError("each weekday may appear only once")
        return days


class ScheduleDayOut(BaseModel):
    weekday: int
    is_open: bool
    open_hour: int
    close_hour: int
    is_default: bool


# --- Availability ---


class SlotOut(BaseModel):
    time: str  # "HH:00"
    status: str  # available | booked | blocked | past


class AvailabilityOut(BaseModel):
    court_id: int
    court_name: str
    hourly_rate: Decimal
    date: date
    slots: list[SlotOut]


class CourtWithAvailability(CourtOut):
    available_slots: list[str]
    total_available_slots: int


class AgendaSlotOut(SlotOut):
    booking_id: int | None = None
    player_name: str | None = None
    blocked_slot_id: int | None = None
    reason: str | None = None


class CourtAgenda(BaseModel):
    court_id: int
    court_name: str
    slots: list[AgendaSlotOut]


class AgendaOut(BaseModel):
    date: date
    courts: list[CourtAgenda]


# --- Blocked slots ---


class BlockedSlotIn(BaseModel):
    slot_date: date
    slot_time: time
    reason: str = "Blocked"

    @field_validator("slot_time")
    @classmethod
    def _on_the_hour(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("slot times are venue wall-clock values without a UTC offset")
        if value.minute or value.second or value.microsecond:
            raise ValueError("blocked slots cover whole hours (e.g. 11:00)")
        return value


class BlockedSlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    court_id: int
    slot_date: date
    slot_time: time
    reason: str


# --- Bookings ---


class BookingCreate(BaseModel):
    court_id: int
    booking_date: date
    start_time: time
    duration_hours: int = 1
    sport: str | None = None
    players: int = Field(default=1, ge=1, le=20)
    notes: str | None = None

    @field_validator("start_time")
    @classmethod
    def _wall_clock(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("start_time is a venue wall-clock value without a UTC offset")
        return value


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    court_id: int
    court_name: str
    player_id: int
    player_name: str
    booking_date: date
    start_time: time
    end_time: time
    duration_hours: int
    total_price: Decimal
    status: str
    sport: str
    players: int
    notes: str | None
    payment_receipt_id: str | None
    cancelled_at: datetime | None
    created_at: datetime


class PaymentRequest(BaseModel):
    card_number: str
    holder_name: str
    expiry: str  # MM/YY
    cvv: str


class PaymentOut(BaseModel):
    success: bool
    receipt_id: str | None
    message: str
    booking: BookingOut


# --- Owner ---


class OwnerStatsOut(BaseModel):
    total_courts: int
    total_bookings: int
    confirmed_bookings: int
    pending_bookings: int
    cancelled_bookings: int
    total_revenue: Decimal
    average_booking_value: Decimal
    today_bookings: int
    monthly_revenue: Decimal
    occupancy_rate: int


# --- Favorites ---


class FavoriteIn(BaseModel):
    court_id: int


class FavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    court_id: int
    court_name: str
    establishment_name: str | None
    sport: str
    hourly_rate: Decimal
    is_indoor: bool
    rating: Decimal
    created_at: datetime


# --- Match history ---


class MatchIn(BaseModel):
    opponent_name: str = Field(min_length=1)
    sport: str
    match_date: date
    player_score: int = Field(ge=0)
    opponent_score: int = Field(ge=0)


class MatchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    opponent_name: str
    sport: str
    match_date: date
    player_score: int
    opponent_score: int
    result: MatchResult


# --- Notifications ---


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    kind: str
    title: str
    message: str
    booking_id: int | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime
