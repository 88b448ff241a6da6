"""Match history: results a player records against opponents."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import get_current_account
from vestiario.models.account import Account
from vestiario.models.player import MatchHistoryEntry
from vestiario.schemas import MatchIn, MatchOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])

RECENT_MATCHES = 10


@router.get("", response_model=list[MatchOut])
async def list_recent_matches(
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(MatchHistoryEntry)
        .where(MatchHistoryEntry.account_id == account.id)
        .order_by(MatchHistoryEntry.match_date.desc(), MatchHistoryEntry.id.desc())
        .limit(RECENT_MATCHES)
    )
    return result.scalars().all()


@router.post("", response_model=MatchOut, status_code=status.HTTP_201_CREATED)
async def record_match(
    body: MatchIn,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    entry = MatchHistoryEntry(account_id=account.id, **body.model_dump())
    db.add(entry)
    await db.flush()

    logger.info("Account %s recorded %s match (%s)", account.id, entry.sport, entry.result.value)
    return entry
