"""FastAPI dependencies for injection into route handlers."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.auth import decode_token
from vestiario.core.database import get_db
from vestiario.models.account import Account, AccountRole
from vestiario.models.venue import Court

bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Account:
    """Extract and validate the current account from the JWT bearer token."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
        account_id = int(payload["sub"])
    except (JWTError, KeyError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from None

    result = await db.execute(select(Account).where(Account.id == account_id, Account.is_active.is_(True)))
    account = result.scalar_one_or_none()
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found")

    return account


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


async def require_player(account: Account = Depends(get_current_account)) -> Account:
    if account.role != AccountRole.PLAYER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Player account required")
    return account


async def require_owner(account: Account = Depends(get_current_account)) -> Account:
    if not account.is_owner:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Owner account required")
    return account


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


async def get_active_court(court_id: int, db: AsyncSession) -> Court:
    """Load an active court or raise 404."""
    result = await db.execute(select(Court).where(Court.id == court_id, Court.is_active.is_(True)))
    court = result.scalar_one_or_none()
    if court is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Court not found")
    return court


async def get_owned_court(
    court_id: int,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
) -> Court:
    """Resolve a court from the path that the authenticated owner runs."""
    court = await get_active_court(court_id, db)
    if court.owner_id != owner.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not own this court")
    return court
