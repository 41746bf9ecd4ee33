"""
Reminder Sweep Tests (Unit Tests)
Case-event and task reminder passes against a real (SQLite) database

The sweep opens its own sessions from session_factory; assertions read back
through fresh sessions so nothing comes from a stale identity map.
"""

from datetime import time

import pytest
from sqlalchemy import func, select

from app.models import CaseEvent, Notification, NotificationType, Task, TaskStatus
from app.services import notification_service
from app.services.reminder_service import ReminderSweep

pytestmark = pytest.mark.unit


@pytest.fixture
def sweep(session_factory, today):
    return ReminderSweep(session_factory=session_factory, today_provider=lambda: today)


async def add(db_session, *rows):
    db_session.add_all(rows)
    await db_session.commit()
    return rows[0] if len(rows) == 1 else rows


async def notifications_for(session_factory, type: NotificationType) -> list[Notification]:
    async with session_factory() as session:
        result = await session.execute(
            select(Notification).where(Notification.type == type.value).order_by(Notification.created_at)
        )
        return list(result.scalars().all())


async def reminder_sent(session_factory, event_id) -> bool:
    async with session_factory() as session:
        result = await session.execute(select(CaseEvent.reminder_sent).where(CaseEvent.id == event_id))
        return result.scalar_one()


def event(case, user, title, event_date, reminder_days=7, **kwargs) -> CaseEvent:
    return CaseEvent(
        case_id=case.id,
        created_by=user.id,
        title=title,
        event_date=event_date,
        reminder_days=reminder_days,
        **kwargs,
    )


class TestCaseEventReminders:
    """Case-event pass"""

    @pytest.mark.asyncio
    async def test_event_due_today_plus_lead_time_is_notified(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days
    ):
        hearing = await add(db_session, event(test_case, admin_user, "First hearing", in_days(7)))

        report = await sweep.run_cycle()

        assert report.events_due == 1
        assert report.events_notified == 1
        notifications = await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER)
        assert len(notifications) == 1
        assert notifications[0].user_id == admin_user.id
        assert notifications[0].link == f"/cases/{test_case.id}"
        assert await reminder_sent(session_factory, hearing.id) is True

    @pytest.mark.asyncio
    async def test_event_inside_window_but_not_on_the_day_is_skipped(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days
    ):
        hearing = await add(db_session, event(test_case, admin_user, "Too close", in_days(3)))

        report = await sweep.run_cycle()

        assert report.events_due == 0
        assert await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER) == []
        assert await reminder_sent(session_factory, hearing.id) is False

    @pytest.mark.asyncio
    async def test_zero_lead_time_fires_on_the_day(
        self, sweep, session_factory, db_session, test_case, admin_user, today
    ):
        await add(db_session, event(test_case, admin_user, "Same day", today, reminder_days=0))

        report = await sweep.run_cycle()

        assert report.events_notified == 1

    @pytest.mark.asyncio
    async def test_second_cycle_does_not_notify_again(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days
    ):
        await add(db_session, event(test_case, admin_user, "Once only", in_days(7)))

        await sweep.run_cycle()
        second = await sweep.run_cycle()

        assert second.events_due == 0
        assert len(await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER)) == 1

    @pytest.mark.asyncio
    async def test_event_without_creator_is_not_selected(
        self, sweep, session_factory, db_session, test_case, in_days
    ):
        await add(
            db_session,
            CaseEvent(case_id=test_case.id, created_by=None, title="Orphan", event_date=in_days(7), reminder_days=7),
        )

        report = await sweep.run_cycle()

        assert report.events_due == 0

    @pytest.mark.asyncio
    async def test_message_uses_creator_language(
        self, sweep, session_factory, db_session, test_case, admin_user, employee_user, in_days
    ):
        await add(
            db_session,
            event(test_case, admin_user, "English hearing", in_days(7), event_time=time(9, 30), location="Court 3"),
            event(test_case, employee_user, "Arabic hearing", in_days(7)),
        )

        await sweep.run_cycle()

        notifications = await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER)
        by_user = {n.user_id: n for n in notifications}
        english = by_user[admin_user.id]
        assert english.title == "Case event reminder"
        assert "English hearing" in english.message
        assert "Unpaid invoices (#2025/117)" in english.message
        assert "Société Générale Test" in english.message
        assert in_days(7).strftime("%d/%m/%Y") in english.message
        assert "09:30" in english.message
        assert "Court 3" in english.message

        arabic = by_user[employee_user.id]
        assert arabic.title == "تذكير بموعد قضية"
        assert "غير محدد" in arabic.message  # No time / location


class TestPastEventReset:
    """Reset of reminder_sent for past events"""

    @pytest.mark.asyncio
    async def test_past_sent_event_is_reset(self, sweep, session_factory, db_session, test_case, admin_user, in_days):
        past = await add(db_session, event(test_case, admin_user, "Last week", in_days(-7), reminder_sent=True))
        upcoming = await add(db_session, event(test_case, admin_user, "Next week", in_days(5), reminder_sent=True))

        report = await sweep.run_cycle()

        assert report.events_reset == 1
        assert await reminder_sent(session_factory, past.id) is False
        assert await reminder_sent(session_factory, upcoming.id) is True
        assert await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER) == []

    @pytest.mark.asyncio
    async def test_reset_event_in_the_past_is_never_notified(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days
    ):
        await add(db_session, event(test_case, admin_user, "Long gone", in_days(-1), reminder_days=0))

        report = await sweep.run_cycle()

        assert report.events_due == 0
        assert await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER) == []


class TestTaskReminders:
    """Task pass"""

    @pytest.mark.asyncio
    async def test_pending_task_inside_window_is_notified(
        self, sweep, session_factory, db_session, employee_user, in_days
    ):
        task = await add(
            db_session,
            Task(title="File appeal", assigned_to=employee_user.id, due_date=in_days(2), reminder_days=3),
        )

        report = await sweep.run_cycle()

        assert report.tasks_notified == 1
        notifications = await notifications_for(session_factory, NotificationType.TASK_REMINDER)
        assert len(notifications) == 1
        assert notifications[0].user_id == employee_user.id
        assert notifications[0].link == f"/tasks/{task.id}"
        assert "File appeal" in notifications[0].message
        assert in_days(2).strftime("%d/%m/%Y") in notifications[0].message

    @pytest.mark.asyncio
    async def test_completed_task_is_skipped(self, sweep, session_factory, db_session, employee_user, in_days):
        await add(
            db_session,
            Task(title="Done", assigned_to=employee_user.id, due_date=in_days(1), status=TaskStatus.COMPLETED),
        )

        report = await sweep.run_cycle()

        assert report.tasks_due == 0
        assert await notifications_for(session_factory, NotificationType.TASK_REMINDER) == []

    @pytest.mark.asyncio
    async def test_window_bounds(self, sweep, session_factory, db_session, employee_user, today, in_days):
        await add(
            db_session,
            Task(title="due today", assigned_to=employee_user.id, due_date=today, reminder_days=3),
            Task(title="in progress", assigned_to=employee_user.id, due_date=in_days(3), status=TaskStatus.IN_PROGRESS),
            Task(title="too early", assigned_to=employee_user.id, due_date=in_days(4), reminder_days=3),
            Task(title="overdue", assigned_to=employee_user.id, due_date=in_days(-1), reminder_days=3),
            Task(title="cancelled", assigned_to=employee_user.id, due_date=today, status=TaskStatus.CANCELLED),
        )

        report = await sweep.run_cycle()

        assert report.tasks_due == 2
        messages = [n.message for n in await notifications_for(session_factory, NotificationType.TASK_REMINDER)]
        assert any("due today" in m for m in messages)
        assert any("in progress" in m for m in messages)

    @pytest.mark.asyncio
    async def test_tasks_without_assignee_or_lead_time_are_skipped(
        self, sweep, db_session, employee_user, in_days
    ):
        await add(
            db_session,
            Task(title="unassigned", assigned_to=None, due_date=in_days(1)),
            Task(title="no lead time", assigned_to=employee_user.id, due_date=in_days(1), reminder_days=None),
        )

        report = await sweep.run_cycle()

        assert report.tasks_due == 0

    @pytest.mark.asyncio
    async def test_task_is_notified_on_every_cycle(self, sweep, session_factory, db_session, employee_user, in_days):
        await add(db_session, Task(title="Nagging", assigned_to=employee_user.id, due_date=in_days(1)))

        await sweep.run_cycle()
        await sweep.run_cycle()

        # Tasks have no sent flag: each cycle inside the window notifies again
        assert len(await notifications_for(session_factory, NotificationType.TASK_REMINDER)) == 2


class TestFailureHandling:
    """Per-item, per-pass and per-cycle failure isolation"""

    @pytest.mark.asyncio
    async def test_failing_event_does_not_block_the_others(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days, monkeypatch
    ):
        broken, healthy = await add(
            db_session,
            event(test_case, admin_user, "Broken hearing", in_days(7), event_time=time(9, 0)),
            event(test_case, admin_user, "Healthy hearing", in_days(7), event_time=time(11, 0)),
        )
        real_create_notification = notification_service.create_notification

        async def flaky_create_notification(session, **kwargs):
            notification = await real_create_notification(session, **kwargs)
            if "Broken hearing" in kwargs["message"]:
                raise RuntimeError("insert failed after flush")
            return notification

        monkeypatch.setattr("app.services.reminder_service.create_notification", flaky_create_notification)

        report = await sweep.run_cycle()

        assert report.events_due == 2
        assert report.events_notified == 1
        assert report.events_failed == 1
        assert not report.ok
        notifications = await notifications_for(session_factory, NotificationType.CASE_EVENT_REMINDER)
        assert len(notifications) == 1
        assert "Healthy hearing" in notifications[0].message
        assert await reminder_sent(session_factory, broken.id) is False
        assert await reminder_sent(session_factory, healthy.id) is True

    @pytest.mark.asyncio
    async def test_failed_event_is_retried_next_cycle(
        self, sweep, session_factory, db_session, test_case, admin_user, in_days, monkeypatch
    ):
        hearing = await add(db_session, event(test_case, admin_user, "Retry me", in_days(7)))

        async def failing_create_notification(session, **kwargs):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr("app.services.reminder_service.create_notification", failing_create_notification)
        first = await sweep.run_cycle()
        assert first.events_failed == 1

        monkeypatch.undo()
        second = await sweep.run_cycle()

        assert second.events_notified == 1
        assert await reminder_sent(session_factory, hearing.id) is True

    @pytest.mark.asyncio
    async def test_failing_event_pass_still_runs_task_pass(
        self, sweep, session_factory, db_session, test_case, admin_user, employee_user, in_days, monkeypatch
    ):
        past = await add(db_session, event(test_case, admin_user, "Past", in_days(-3), reminder_sent=True))
        await add(db_session, Task(title="Still reminded", assigned_to=employee_user.id, due_date=in_days(1)))

        async def failing_select(self, session, today):
            raise RuntimeError("query failed")

        monkeypatch.setattr(ReminderSweep, "select_due_events", failing_select)

        report = await sweep.run_cycle()

        assert report.errors and report.errors[0].startswith("case_events")
        assert report.tasks_notified == 1
        # The reset runs inside the case-event pass, so it is skipped as well
        assert report.events_reset == 0
        assert await reminder_sent(session_factory, past.id) is True

    @pytest.mark.asyncio
    async def test_cycle_level_failure_is_reported(self, sweep, monkeypatch):
        async def exploding_pass(self, today, report):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(ReminderSweep, "check_case_event_reminders", exploding_pass)

        report = await sweep.run_cycle()

        assert report.errors == ["cycle: unexpected"]
        assert report.tasks_due == 0

    @pytest.mark.asyncio
    async def test_huge_lead_time_does_not_abort_the_passes(
        self, sweep, session_factory, db_session, test_case, admin_user, employee_user, in_days
    ):
        past = await add(db_session, event(test_case, admin_user, "Past", in_days(-2), reminder_sent=True))
        await add(
            db_session,
            event(test_case, admin_user, "Far lead time", in_days(7), reminder_days=3_000_000),
            event(test_case, admin_user, "Regular hearing", in_days(7)),
            Task(title="Far task", assigned_to=employee_user.id, due_date=in_days(1), reminder_days=3_000_000),
            Task(title="Regular task", assigned_to=employee_user.id, due_date=in_days(1)),
        )

        report = await sweep.run_cycle()

        assert report.errors == []
        assert report.events_notified == 1
        assert report.events_reset == 1
        assert await reminder_sent(session_factory, past.id) is False
        # A lead time longer than the remaining days still puts the task inside its window
        assert report.tasks_notified == 2

    @pytest.mark.asyncio
    async def test_empty_database(self, sweep, session_factory):
        report = await sweep.run_cycle()

        assert report.ok
        async with session_factory() as session:
            count = await session.execute(select(func.count(Notification.id)))
            assert count.scalar_one() == 0
