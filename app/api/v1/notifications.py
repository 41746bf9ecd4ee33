"""Notifications API - In-app notifications of the current staff user

Endpoints:
- GET /notifications - List notifications (newest first)
- GET /notifications/unread-count - Number of unread notifications
- PATCH /notifications/{notification_id}/read - Mark one as read
- POST /notifications/read-all - Mark all as read
"""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Notification, User
from app.schemas.notification import (
    NotificationListResponse,
    NotificationMarkAllReadResponse,
    NotificationResponse,
    NotificationUnreadCountResponse,
)
from app.users import staff_user

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


async def _unread_count(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.read == False,  # noqa: E712
        )
    )
    return result.scalar_one()


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    unread_only: bool = False,
    limit: int = 50,
) -> NotificationListResponse:
    """Notifications of the current user, newest first

    Args:
        unread_only: Only return unread notifications
        limit: Maximum number of notifications
    """
    query = select(Notification).where(Notification.user_id == current_user.id)
    if unread_only:
        query = query.where(Notification.read == False)  # noqa: E712

    result = await db.execute(query.order_by(Notification.created_at.desc()).limit(limit))
    notifications = result.scalars().all()

    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        total=len(notifications),
        unread_count=await _unread_count(db, current_user.id),
    )


@router.get("/unread-count", response_model=NotificationUnreadCountResponse)
async def get_unread_count(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NotificationUnreadCountResponse:
    return NotificationUnreadCountResponse(unread_count=await _unread_count(db, current_user.id))


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Mark a notification of the current user as read

    Raises:
        404: Notification not found (or owned by another user)
    """
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, Notification.user_id == current_user.id)
    )
    notification = result.scalar_one_or_none()
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    if not notification.read:
        notification.read = True
        notification.read_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(notification)

    return notification


@router.post("/read-all", response_model=NotificationMarkAllReadResponse)
async def mark_all_as_read(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NotificationMarkAllReadResponse:
    """Mark every unread notification of the current user as read"""
    result = await db.execute(
        update(Notification)
        .where(Notification.user_id == current_user.id, Notification.read == False)  # noqa: E712
        .values(read=True, read_at=datetime.now(timezone.utc))
    )
    await db.commit()
    return NotificationMarkAllReadResponse(updated=result.rowcount or 0)
