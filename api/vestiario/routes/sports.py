"""Sport catalogue."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.models.venue import Sport
from vestiario.schemas import SportOut

router = APIRouter(prefix="/sports", tags=["sports"])

# Served while the sports table is still empty
DEFAULT_SPORTS = [
    SportOut(id="futebol", name="Futebol", icon="⚽"),
    SportOut(id="futsal", name="Futsal", icon="⚽"),
    SportOut(id="tenis", name="Tênis", icon="🎾"),
    SportOut(id="padel", name="Padel", icon="🎾"),
    SportOut(id="volei", name="Vôlei", icon="🏐"),
    SportOut(id="beach-tennis", name="Beach Tennis", icon="🏖️"),
    SportOut(id="basquete", name="Basquete", icon="🏀"),
]


@router.get("", response_model=list[SportOut])
async def list_sports(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Sport).order_by(Sport.name))
    rows = result.scalars().all()
    if not rows:
        return DEFAULT_SPORTS

    seen: set[str] = set()
    out = []
    for sport in rows:
        key = sport.name.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(SportOut(id=str(sport.id), name=sport.name, icon=sport.icon))
    return out
