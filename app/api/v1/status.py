"""Status and Health Check Endpoints

Service liveness and the state of the daily reminder scheduler.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import settings
from app.services.scheduler import reminder_scheduler

router = APIRouter(prefix="/api/v1/status", tags=["status"])


@router.get("")
async def health_check():
    """API health check endpoint

    Returns:
        dict: Service health status with version and timestamp
    """
    return {
        "status": "healthy",
        "service": "office-api",
        "version": "0.1.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/reminders")
async def reminder_status():
    """Reminder scheduler status

    Example response:
        {
            "enabled": true,
            "running": true,
            "schedule": "08:00 Africa/Tunis",
            "next_run_time": "2025-10-27T08:00:00+01:00"
        }
    """
    next_run = reminder_scheduler.next_run_time()
    return {
        "enabled": settings.REMINDERS_ENABLED,
        "running": reminder_scheduler.running,
        "schedule": f"{reminder_scheduler.hour:02d}:{reminder_scheduler.minute:02d} {reminder_scheduler.timezone.key}",
        "next_run_time": next_run.isoformat() if next_run else None,
    }
