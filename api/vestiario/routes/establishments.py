"""An owner's establishment: one per owner, grouping their courts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import require_owner
from vestiario.models.account import Account
from vestiario.models.venue import Court, Establishment
from vestiario.schemas import EstablishmentIn, EstablishmentOut, EstablishmentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/establishments", tags=["establishments"])


async def _get_mine(db: AsyncSession, owner_id: int) -> Establishment | None:
    result = await db.execute(select(Establishment).where(Establishment.owner_id == owner_id))
    return result.scalar_one_or_none()


@router.get("/mine", response_model=EstablishmentOut)
async def get_my_establishment(
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    establishment = await _get_mine(db, owner.id)
    if not establishment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No establishment registered")
    return establishment


@router.post("/mine", response_model=EstablishmentOut, status_code=status.HTTP_201_CREATED)
async def create_my_establishment(
    body: EstablishmentIn,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    if await _get_mine(db, owner.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Establishment already registered")

    establishment = Establishment(owner_id=owner.id, **body.model_dump())
    db.add(establishment)
    await db.flush()

    # Courts created before the establishment join it now
    await db.execute(
        update(Court)
        .where(Court.owner_id == owner.id, Court.establishment_id.is_(None))
        .values(establishment_id=establishment.id)
        .execution_options(synchronize_session=False)
    )

    logger.info("Owner %s registered establishment %s", owner.id, establishment.id)
    return establishment


@router.patch("/mine", response_model=EstablishmentOut)
async def update_my_establishment(
    body: EstablishmentUpdate,
    owner: Account = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    establishment = await _get_mine(db, owner.id)
    if not establishment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No establishment registered")

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(establishment, field, value)
    await db.flush()
    return establishment
