"""Notification Service - Create notifications and render their message templates

Every notification in the system goes through create_notification(), whether it comes
from the reminder sweep or from a CRUD side effect (task assignment, new client).

Templates exist in Arabic (office default) and English; the recipient's language
preference wins over NOTIFICATION_LANGUAGE.
"""

import logging
from datetime import date, time
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.notification import Notification, NotificationType
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("ar", "en")

TEMPLATES = {
    "ar": {
        "case_event_reminder_title": "تذكير بموعد قضية",
        "case_event_reminder": (
            "⏰ تذكير بموعد قضية\n\n"
            "📌 الموعد: {event_title}\n"
            "📂 القضية: {case_label}\n"
            "👤 العميل: {client_name}\n"
            "📅 التاريخ: {event_date}\n"
            "⏰ الوقت: {event_time}\n"
            "📍 المكان: {location}\n\n"
            "🔔 سيتم التذكير قبل {reminder_days} يوم من الموعد"
        ),
        "unspecified": "غير محدد",
        "task_reminder_title": "تذكير بمهمة",
        "task_reminder": 'المهمة "{task_title}" تستحق في {due_date}',
        "task_assigned_title": "مهمة جديدة",
        "task_assigned": "تم تعيينك بمهمة جديدة: {task_title}",
        "client_created_title": "عميل جديد - بيانات الدخول",
        "client_created": (
            "تم إنشاء حساب لعميل جديد:\n"
            "الاسم: {client_name}\n"
            "اسم المستخدم: {login}\n"
            "كلمة المرور: {password}\n"
            "يرجى التواصل مع العميل لإعطائه بيانات الدخول"
        ),
    },
    "en": {
        "case_event_reminder_title": "Case event reminder",
        "case_event_reminder": (
            "⏰ Case event reminder\n\n"
            "📌 Event: {event_title}\n"
            "📂 Case: {case_label}\n"
            "👤 Client: {client_name}\n"
            "📅 Date: {event_date}\n"
            "⏰ Time: {event_time}\n"
            "📍 Location: {location}\n\n"
            "🔔 Reminder sent {reminder_days} day(s) before the event"
        ),
        "unspecified": "unspecified",
        "task_reminder_title": "Task reminder",
        "task_reminder": 'Task "{task_title}" is due on {due_date}',
        "task_assigned_title": "New task",
        "task_assigned": "You have been assigned a new task: {task_title}",
        "client_created_title": "New client - portal credentials",
        "client_created": (
            "A portal account was created for a new client:\n"
            "Name: {client_name}\n"
            "Login: {login}\n"
            "Password: {password}\n"
            "Please contact the client to hand over the credentials"
        ),
    },
}


def resolve_language(language: str | None) -> str:
    """Pick the template language for a recipient"""
    if language in SUPPORTED_LANGUAGES:
        return language
    if settings.NOTIFICATION_LANGUAGE in SUPPORTED_LANGUAGES:
        return settings.NOTIFICATION_LANGUAGE
    return "ar"


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def render_case_event_reminder(
    *,
    event_title: str,
    case_title: str,
    case_number: str | None,
    client_name: str,
    event_date: date,
    event_time: time | None,
    location: str | None,
    reminder_days: int,
    language: str | None = None,
) -> tuple[str, str]:
    """Render (title, message) for a case event reminder"""
    templates = TEMPLATES[resolve_language(language)]
    case_label = f"{case_title} (#{case_number})" if case_number else case_title
    message = templates["case_event_reminder"].format(
        event_title=event_title,
        case_label=case_label,
        client_name=client_name,
        event_date=format_date(event_date),
        event_time=event_time.strftime("%H:%M") if event_time else templates["unspecified"],
        location=location or templates["unspecified"],
        reminder_days=reminder_days,
    )
    return templates["case_event_reminder_title"], message


def render_task_reminder(*, task_title: str, due_date: date, language: str | None = None) -> tuple[str, str]:
    """Render (title, message) for a task reminder"""
    templates = TEMPLATES[resolve_language(language)]
    return templates["task_reminder_title"], templates["task_reminder"].format(
        task_title=task_title, due_date=format_date(due_date)
    )


def render_task_assigned(*, task_title: str, language: str | None = None) -> tuple[str, str]:
    """Render (title, message) for a newly assigned task"""
    templates = TEMPLATES[resolve_language(language)]
    return templates["task_assigned_title"], templates["task_assigned"].format(task_title=task_title)


def render_client_created(
    *, client_name: str, login: str, password: str, language: str | None = None
) -> tuple[str, str]:
    """Render (title, message) carrying a new client's portal credentials"""
    templates = TEMPLATES[resolve_language(language)]
    return templates["client_created_title"], templates["client_created"].format(
        client_name=client_name, login=login, password=password
    )


async def create_notification(
    db: AsyncSession,
    *,
    user_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    link: str | None = None,
) -> Notification:
    """Insert a notification for a user

    The row is flushed (so it gets its id) but not committed; the caller owns the
    transaction.
    """
    notification = Notification(
        user_id=user_id,
        type=type.value,
        title=title,
        message=message,
        link=link,
        read=False,
    )
    db.add(notification)
    await db.flush()
    return notification


async def notify_staff(db: AsyncSession, *, type: NotificationType, link: str | None, render) -> int:
    """Send one notification to every active admin and employee

    Args:
        render: Callable taking a language code and returning (title, message)

    Returns:
        Number of notifications created
    """
    result = await db.execute(
        select(User.id, User.language).where(
            User.role.in_([UserRole.ADMIN, UserRole.EMPLOYEE]),
            User.is_active == True,  # noqa: E712
        )
    )
    recipients = result.all()
    for user_id, language in recipients:
        title, message = render(language)
        await create_notification(db, user_id=user_id, type=type, title=title, message=message, link=link)
    return len(recipients)
