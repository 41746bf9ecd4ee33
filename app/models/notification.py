"""Notification Model - Store user notifications

Notifications are created by:
- The daily reminder sweep (case event reminders, task reminders)
- Task creation (assignee is told about the new task)
- Client creation (admins and employees receive the portal credentials)

The sweep only ever inserts notifications; the read flag is owned by the user.
"""

import uuid
from enum import Enum

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, func

from app.database import Base


class NotificationType(str, Enum):
    """Notification types"""

    CASE_EVENT_REMINDER = "case_event_reminder"  # Upcoming hearing/meeting/deadline
    TASK_REMINDER = "task_reminder"  # Task due soon
    TASK_ASSIGNED = "task_assigned"  # New task assigned to the user
    CLIENT_CREATED = "client_created"  # New client with portal credentials


class Notification(Base):
    """Notification model - per-user messages

    Attributes:
        id: Unique notification identifier (UUID)
        user_id: Foreign key to User who receives this notification
        type: Notification type (enum value)
        title: Notification title (e.g., "تذكير بموعد قضية")
        message: Notification message body (multi-line free text)
        link: Relative URL into the application (e.g., "/cases/{case_id}")
        read: Whether notification has been read (default: False)
        read_at: When notification was read
        created_at: When notification was created
    """

    __tablename__ = "notifications"

    # Primary key
    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    # Foreign keys
    user_id = Column(GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Notification content
    type = Column(String(50), nullable=False, index=True)  # NotificationType enum value
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(500), nullable=True)

    # Read status
    read = Column(Boolean, default=False, nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_notifications_user_read", "user_id", "read"),  # Get unread notifications for user
        Index("ix_notifications_user_created", "user_id", "created_at"),  # List user's notifications by date
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, type={self.type}, read={self.read})>"
