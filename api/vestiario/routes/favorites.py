"""Favorite courts of the current account."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import get_active_court, get_current_account
from vestiario.models.account import Account
from vestiario.models.player import Favorite
from vestiario.schemas import FavoriteIn, FavoriteOut

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=list[FavoriteOut])
async def list_favorites(
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Favorite)
        .where(Favorite.account_id == account.id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    return result.scalars().all()


@router.post("", response_model=FavoriteOut, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    body: FavoriteIn,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    court = await get_active_court(body.court_id, db)

    existing = await db.execute(
        select(Favorite).where(Favorite.account_id == account.id, Favorite.court_id == court.id)
    )
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Court already in favorites")

    # Snapshot the card fields so the list renders without joining courts
    favorite = Favorite(
        account_id=account.id,
        court_id=court.id,
        court_name=court.name,
        establishment_name=court.establishment_name,
        sport=court.sport,
        hourly_rate=court.hourly_rate,
        is_indoor=court.is_indoor,
        rating=court.rating,
    )
    db.add(favorite)
    await db.flush()
    return favorite


@router.delete("/{court_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    court_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Favorite).where(Favorite.account_id == account.id, Favorite.court_id == court_id))
    favorite = result.scalar_one_or_none()
    if not favorite:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")

    await db.delete(favorite)
