"""
Office API - FastAPI Application
Backend for the debt-recovery office: clients, files, cases, tasks, documents and reminders
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import (
    auth,
    case_events,
    case_types,
    cases,
    clients,
    documents,
    expenses,
    files,
    notifications,
    portal,
    stats,
    status,
    tasks,
    users,
)
from app.config import settings
from app.services.scheduler import reminder_scheduler
from app.utils.logging_config import setup_logging

# Configure logging from environment variables (one-time setup)
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the daily reminder scheduler with the application"""
    if settings.REMINDERS_ENABLED:
        reminder_scheduler.start()
    else:
        logger.info("Reminders disabled (REMINDERS_ENABLED=false)")
    yield
    reminder_scheduler.shutdown()


app = FastAPI(
    title="Office API",
    version="0.1.0",
    description="Backend API for the debt-recovery office management application",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "service": "office-api",
    }


# Include routers
app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(users.router)
app.include_router(clients.router)
app.include_router(files.router)
app.include_router(expenses.router)
app.include_router(tasks.router)
app.include_router(documents.router)
app.include_router(case_types.router)
app.include_router(cases.router)
app.include_router(case_events.router)
app.include_router(notifications.router)
app.include_router(stats.router)
app.include_router(portal.router)
app.include_router(status.router, tags=["status"])
