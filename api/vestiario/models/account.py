"""Account model.

An account is a person who can log in, either as a player (books courts)
or as an owner (runs an establishment and its courts).
"""

import enum

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from vestiario.models.base import Base, TimestampMixin


class AccountRole(enum.StrEnum):
    PLAYER = "player"
    OWNER = "owner"


class Account(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role: Mapped[AccountRole] = mapped_column(
        Enum(AccountRole, name="account_role", values_callable=lambda e: [x.value for x in e]),
        default=AccountRole.PLAYER,
        nullable=False,
    )

    # Profile
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))

    @property
    def is_owner(self) -> bool:
        return self.role == AccountRole.OWNER

    def __repr__(self) -> str:
        return f"<Account {self.email} ({self.role.value})>"
