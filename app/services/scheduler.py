"""Reminder Scheduler - Fires the reminder sweep once a day

APScheduler AsyncIOScheduler with a cron trigger at REMINDER_HOUR:REMINDER_MINUTE in the
office timezone. Started and stopped by the FastAPI lifespan when REMINDERS_ENABLED is
set. max_instances=1 keeps a slow cycle from overlapping the next one inside this
process; multiple processes are not coordinated.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import settings
from app.services.reminder_service import run_reminder_sweep

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = "reminder-sweep"


class ReminderScheduler:
    """Owns the process-wide scheduler and the daily reminder job"""

    def __init__(
        self,
        job: Callable[[], Awaitable[object]] = run_reminder_sweep,
        hour: int | None = None,
        minute: int | None = None,
        timezone: str | None = None,
    ):
        self.job = job
        self.hour = settings.REMINDER_HOUR if hour is None else hour
        self.minute = settings.REMINDER_MINUTE if minute is None else minute
        self.timezone = ZoneInfo(timezone or settings.TIMEZONE)
        self.scheduler = AsyncIOScheduler(timezone=self.timezone)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Register the daily job and start the scheduler (needs a running event loop)"""
        if self.scheduler.running:
            return
        self.scheduler.add_job(
            self.job,
            CronTrigger(hour=self.hour, minute=self.minute, timezone=self.timezone),
            id=REMINDER_JOB_ID,
            name="Daily reminder sweep",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=3600,
        )
        self.scheduler.start()
        logger.info(f"Reminder scheduler started (daily at {self.hour:02d}:{self.minute:02d} {self.timezone.key})")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Reminder scheduler stopped")

    def next_run_time(self) -> datetime | None:
        job = self.scheduler.get_job(REMINDER_JOB_ID)
        return job.next_run_time if job else None


# Process-wide instance used by app.main
reminder_scheduler = ReminderScheduler()
