"""Statistics API - Dashboard figures and reports"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import User
from app.schemas.stats import ClientStatisticsRow, DashboardResponse, MonthlyStatisticsRow
from app.services import stats_service
from app.services.reminder_service import office_today
from app.users import admin_user, staff_user

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Files by status, clients, tasks, financial totals, recent files and upcoming tasks"""
    return await stats_service.dashboard(db, office_today())


@router.get("/clients", response_model=list[ClientStatisticsRow])
async def get_client_statistics(
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Per-client aggregates, largest total debt first"""
    return await stats_service.client_statistics(db)


@router.get("/monthly", response_model=list[MonthlyStatisticsRow])
async def get_monthly_statistics(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Per-month aggregates of the current year"""
    return await stats_service.monthly_statistics(db, office_today().year)


@router.get("/monthly/{year}", response_model=list[MonthlyStatisticsRow])
async def get_monthly_statistics_for_year(
    year: int,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await stats_service.monthly_statistics(db, year)
