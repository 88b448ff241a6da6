"""Notification inbox of the current account."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vestiario.core.database import get_db
from vestiario.core.dependencies import get_current_account
from vestiario.models.account import Account
from vestiario.models.notification import Notification
from vestiario.schemas import NotificationOut
from vestiario.services.notifications import list_notifications, mark_all_read

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
async def get_notifications(
    unread: bool = False,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    notifications = await list_notifications(db, account.id)
    if unread:
        return [n for n in notifications if not n.is_read]
    return notifications


@router.post("/{notification_id}/read", response_model=NotificationOut)
async def mark_notification_read(
    notification_id: int,
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.account_id == account.id)
    )
    notification = result.scalar_one_or_none()
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    if not notification.is_read:
        notification.is_read = True
        notification.read_at = datetime.now(UTC)
        await db.flush()
    return notification


@router.post("/read-all")
async def mark_all_notifications_read(
    account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    updated = await mark_all_read(db, account.id)
    return {"updated": updated}
