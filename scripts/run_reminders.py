#!/usr/bin/env python3
"""
Run one reminder sweep cycle from the command line

Usage:
    python scripts/run_reminders.py                  # today in the office timezone
    python scripts/run_reminders.py --date 2025-11-03

Exit code is 1 when any event, task or pass failed.
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.services.reminder_service import ReminderSweep, office_today  # noqa: E402
from app.utils.logging_config import setup_logging  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one reminder sweep cycle")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run as if today were this date (YYYY-MM-DD). Default: today in TIMEZONE",
    )
    return parser.parse_args(argv)


async def run(run_date: date | None) -> int:
    sweep = ReminderSweep(today_provider=(lambda: run_date) if run_date else office_today)
    report = await sweep.run_cycle()

    print(f"📅 Reminder sweep for {report.run_date.isoformat()}")
    print(f"   Case events: {report.events_notified}/{report.events_due} notified, {report.events_failed} failed")
    print(f"   Past events reset: {report.events_reset}")
    print(f"   Tasks: {report.tasks_notified}/{report.tasks_due} notified, {report.tasks_failed} failed")
    for error in report.errors:
        print(f"❌ {error}")

    return 0 if report.ok else 1


def main():
    setup_logging()
    args = parse_args()
    sys.exit(asyncio.run(run(args.date)))


if __name__ == "__main__":
    main()
