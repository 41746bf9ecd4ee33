"""Notification Schemas - Request/Response models for notifications API"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.models.notification import NotificationType


class NotificationResponse(BaseModel):
    """Notification response schema"""

    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    link: str | None = None
    read: bool
    read_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    """List of notifications with unread count"""

    notifications: list[NotificationResponse]
    total: int
    unread_count: int


class NotificationUnreadCountResponse(BaseModel):
    """Unread notification count response"""

    unread_count: int


class NotificationMarkAllReadResponse(BaseModel):
    updated: int
