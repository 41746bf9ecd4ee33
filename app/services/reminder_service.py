"""Reminder Sweep - Daily case-event and task reminder notifications

One sweep cycle runs two passes in order:

1. Case events: every event with reminder_sent = false whose date is exactly
   today + reminder_days (and not in the past) gets one notification for its creator,
   then reminder_sent is set to true. Afterwards every event with reminder_sent = true
   whose date is already past is reset to reminder_sent = false.
2. Tasks: every pending / in-progress task whose due date lies within
   [today, today + reminder_days] gets one notification for its assignee. Tasks have no
   sent flag, so a task is re-notified on every cycle until it is due, completed or
   cancelled.

Failure handling:
- A failing item (insert/update) is rolled back, logged, and the pass continues.
- A failing pass (selection query) is logged; the other pass still runs.
- The notification insert and the reminder_sent update of an event are committed
  together per event, but a crash between cycles is only recovered by the predicates of
  the next cycle.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from sqlalchemy import select, update
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.database import AsyncSessionLocal
from app.models.case import Case, CaseEvent
from app.models.client import Client
from app.models.notification import NotificationType
from app.models.task import OPEN_TASK_STATUSES, Task
from app.models.user import User
from app.services.notification_service import (
    create_notification,
    render_case_event_reminder,
    render_task_reminder,
)

logger = logging.getLogger(__name__)


def office_today() -> date:
    """Current date in the office timezone"""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


@dataclass
class SweepReport:
    """Outcome of one sweep cycle"""

    run_date: date
    events_due: int = 0
    events_notified: int = 0
    events_failed: int = 0
    events_reset: int = 0
    tasks_due: int = 0
    tasks_notified: int = 0
    tasks_failed: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and not self.events_failed and not self.tasks_failed


class ReminderSweep:
    """Scans case events and tasks and emits reminder notifications

    Args:
        session_factory: Async session factory (each pass opens its own session)
        today_provider: Returns "today" (office timezone by default)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
        today_provider: Callable[[], date] = office_today,
    ):
        self.session_factory = session_factory
        self.today_provider = today_provider

    async def run_cycle(self) -> SweepReport:
        """Run the case-event pass followed by the task pass"""
        today = self.today_provider()
        report = SweepReport(run_date=today)
        logger.info(f"Starting reminder sweep for {today.isoformat()}")

        try:
            await self.check_case_event_reminders(today, report)
            await self.check_task_reminders(today, report)
        except Exception as e:
            report.errors.append(f"cycle: {e}")
            logger.exception("Reminder sweep aborted")

        logger.info(
            f"Reminder sweep done: events {report.events_notified}/{report.events_due} notified, "
            f"{report.events_reset} reset; tasks {report.tasks_notified}/{report.tasks_due} notified"
        )
        return report

    # --- Case events ---

    async def check_case_event_reminders(self, today: date, report: SweepReport) -> None:
        """Case-event pass: notify due events, then reset reminders of past events"""
        try:
            async with self.session_factory() as session:
                due_events = await self.select_due_events(session, today)
                report.events_due = len(due_events)
                logger.info(f"Found {len(due_events)} case events needing reminders")

                for event in due_events:
                    try:
                        await self._send_case_event_reminder(session, event)
                        await session.commit()
                        report.events_notified += 1
                        logger.info(f'Sent reminder for event "{event.title}" to user {event.user_id}')
                    except Exception:
                        await session.rollback()
                        report.events_failed += 1
                        logger.exception(f"Error sending reminder for case event {event.id}")

                report.events_reset = await self.reset_past_event_reminders(session, today)
        except Exception as e:
            report.errors.append(f"case_events: {e}")
            logger.exception("Error checking case event reminders")

    async def select_due_events(self, session: AsyncSession, today: date) -> list[Row]:
        """Events with reminder_sent = false, event_date >= today and event_date == today + reminder_days

        Only events whose case, client and creator exist are returned.
        """
        result = await session.execute(
            select(
                CaseEvent.id,
                CaseEvent.case_id,
                CaseEvent.title,
                CaseEvent.event_date,
                CaseEvent.event_time,
                CaseEvent.location,
                CaseEvent.reminder_days,
                Case.title.label("case_title"),
                Case.case_number,
                Client.name.label("client_name"),
                User.id.label("user_id"),
                User.language,
            )
            .join(Case, CaseEvent.case_id == Case.id)
            .join(Client, Case.client_id == Client.id)
            .join(User, CaseEvent.created_by == User.id)
            .where(CaseEvent.reminder_sent == False, CaseEvent.event_date >= today)  # noqa: E712
            .order_by(CaseEvent.event_date, CaseEvent.event_time)
        )
        # Compared in Python as integer day differences; reminder_days is never added to a date
        return [row for row in result.all() if (row.event_date - today).days == row.reminder_days]

    async def _send_case_event_reminder(self, session: AsyncSession, event: Row) -> None:
        title, message = render_case_event_reminder(
            event_title=event.title,
            case_title=event.case_title,
            case_number=event.case_number,
            client_name=event.client_name,
            event_date=event.event_date,
            event_time=event.event_time,
            location=event.location,
            reminder_days=event.reminder_days,
            language=event.language,
        )
        await create_notification(
            session,
            user_id=event.user_id,
            type=NotificationType.CASE_EVENT_REMINDER,
            title=title,
            message=message,
            link=f"/cases/{event.case_id}",
        )
        await session.execute(update(CaseEvent).where(CaseEvent.id == event.id).values(reminder_sent=True))

    async def reset_past_event_reminders(self, session: AsyncSession, today: date) -> int:
        """Reset reminder_sent for every event already in the past

        Applies to all such events, not only those processed in this cycle.

        Returns:
            Number of events reset
        """
        result = await session.execute(
            update(CaseEvent)
            .where(CaseEvent.reminder_sent == True, CaseEvent.event_date < today)  # noqa: E712
            .values(reminder_sent=False)
        )
        await session.commit()
        if result.rowcount:
            logger.info(f"Reset {result.rowcount} past event reminders")
        return result.rowcount or 0

    # --- Tasks ---

    async def check_task_reminders(self, today: date, report: SweepReport) -> None:
        """Task pass: notify the assignee of every open task inside its reminder window"""
        try:
            async with self.session_factory() as session:
                due_tasks = await self.select_due_tasks(session, today)
                report.tasks_due = len(due_tasks)

                for task in due_tasks:
                    try:
                        title, message = render_task_reminder(
                            task_title=task.title, due_date=task.due_date, language=task.language
                        )
                        await create_notification(
                            session,
                            user_id=task.assigned_to,
                            type=NotificationType.TASK_REMINDER,
                            title=title,
                            message=message,
                            link=f"/tasks/{task.id}",
                        )
                        await session.commit()
                        report.tasks_notified += 1
                    except Exception:
                        await session.rollback()
                        report.tasks_failed += 1
                        logger.exception(f"Error sending reminder for task {task.id}")

                logger.info(f"Sent reminders for {report.tasks_notified} tasks")
        except Exception as e:
            report.errors.append(f"tasks: {e}")
            logger.exception("Error checking task reminders")

    async def select_due_tasks(self, session: AsyncSession, today: date) -> list[Row]:
        """Open tasks with an assignee and today <= due_date <= today + reminder_days"""
        result = await session.execute(
            select(
                Task.id,
                Task.title,
                Task.due_date,
                Task.reminder_days,
                Task.assigned_to,
                User.language,
            )
            .join(User, Task.assigned_to == User.id)
            .where(
                Task.status.in_(OPEN_TASK_STATUSES),
                Task.reminder_days.is_not(None),
                Task.due_date >= today,
            )
            .order_by(Task.due_date)
        )
        return [row for row in result.all() if (row.due_date - today).days <= row.reminder_days]


async def run_reminder_sweep() -> SweepReport:
    """Scheduler entry point: one cycle with the application session factory"""
    return await ReminderSweep().run_cycle()
