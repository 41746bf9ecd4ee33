"""Statistics Service - Aggregate queries behind the dashboards

Used by the staff dashboard (/stats), the per-client endpoints (/clients/{id}/...)
and the client portal (/portal). Money columns are Numeric in the database and are
returned as floats.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import case, distinct, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client
from app.models.debt_file import DebtFile, FileStatus, PaidFile
from app.models.expense import FileExpense
from app.models.task import OPEN_TASK_STATUSES, Task, TaskStatus
from app.schemas.client import ClientStatsResponse
from app.schemas.debt_file import FileResponse
from app.schemas.stats import (
    ClientCounts,
    ClientStatisticsRow,
    DashboardResponse,
    FileStats,
    FinancialStats,
    MonthlyStatisticsRow,
    TaskStats,
)
from app.schemas.task import TaskResponse


def as_float(value: Decimal | float | int | None) -> float:
    return float(value) if value is not None else 0.0


def file_to_response(
    file: DebtFile, paid: PaidFile | None = None, total_expenses: Decimal | float | None = None
) -> FileResponse:
    """Build a FileResponse with recovery figures from the paid record"""
    response = FileResponse.model_validate(file)
    if paid is not None and paid.recovered_amount is not None:
        response.recovered_amount = float(paid.recovered_amount)
        if file.total_amount and file.total_amount > 0:
            response.recovery_percentage = float(paid.recovered_amount) / float(file.total_amount) * 100
    if total_expenses is not None:
        response.total_expenses = float(total_expenses)
    return response


def _count_status(column, value):
    return func.count(case((column == value, 1)))


async def client_files(db: AsyncSession, client_id: UUID) -> list[FileResponse]:
    """Files of a client, newest first, with their total expenses"""
    expenses_subquery = (
        select(func.sum(FileExpense.amount)).where(FileExpense.file_id == DebtFile.id).scalar_subquery()
    )
    result = await db.execute(
        select(DebtFile, PaidFile, expenses_subquery.label("total_expenses"))
        .outerjoin(PaidFile, PaidFile.file_id == DebtFile.id)
        .where(DebtFile.client_id == client_id)
        .order_by(DebtFile.created_at.desc())
    )
    return [
        file_to_response(file, paid, total_expenses if total_expenses is not None else 0)
        for file, paid, total_expenses in result.all()
    ]


async def client_stats(db: AsyncSession, client_id: UUID) -> ClientStatsResponse:
    """Totals for one client: files, debt, amount of closed files, share of closed files"""
    result = await db.execute(
        select(
            func.count(DebtFile.id),
            func.sum(DebtFile.total_amount),
            func.sum(case((DebtFile.status == FileStatus.CLOSED, DebtFile.total_amount), else_=0)),
            _count_status(DebtFile.status, FileStatus.CLOSED),
        ).where(DebtFile.client_id == client_id)
    )
    total_files, total_debt, recovered_amount, closed_files = result.one()
    return ClientStatsResponse(
        total_files=total_files,
        total_debt=as_float(total_debt),
        recovered_amount=as_float(recovered_amount),
        recovery_rate=(closed_files / total_files * 100) if total_files else 0.0,
    )


async def dashboard(db: AsyncSession, today: date) -> DashboardResponse:
    """Admin/employee dashboard figures"""
    file_row = (
        await db.execute(
            select(
                func.count(DebtFile.id),
                func.sum(DebtFile.total_amount),
                _count_status(DebtFile.status, FileStatus.NEW),
                _count_status(DebtFile.status, FileStatus.IN_PROGRESS),
                _count_status(DebtFile.status, FileStatus.PAID),
                _count_status(DebtFile.status, FileStatus.PARTIALLY_PAID),
                _count_status(DebtFile.status, FileStatus.CLOSED),
            )
        )
    ).one()
    files = FileStats(
        total_files=file_row[0],
        total_debt=as_float(file_row[1]),
        new_files=file_row[2],
        in_progress_files=file_row[3],
        paid_files=file_row[4],
        partially_paid_files=file_row[5],
        closed_files=file_row[6],
    )

    total_clients = (await db.execute(select(func.count(Client.id)))).scalar_one()
    active_clients = (await db.execute(select(func.count(distinct(DebtFile.client_id))))).scalar_one()

    task_row = (
        await db.execute(
            select(
                func.count(Task.id),
                _count_status(Task.status, TaskStatus.PENDING),
                _count_status(Task.status, TaskStatus.IN_PROGRESS),
                _count_status(Task.status, TaskStatus.COMPLETED),
            )
        )
    ).one()

    financial_row = (
        await db.execute(
            select(
                func.coalesce(func.sum(PaidFile.recovered_amount), 0),
                func.coalesce(func.sum(PaidFile.expenses), 0),
                func.coalesce(func.sum(PaidFile.net_commission), 0),
            )
        )
    ).one()

    recent = await db.execute(
        select(DebtFile, PaidFile)
        .outerjoin(PaidFile, PaidFile.file_id == DebtFile.id)
        .order_by(DebtFile.created_at.desc())
        .limit(5)
    )
    upcoming = await db.execute(
        select(Task)
        .where(Task.status.in_(OPEN_TASK_STATUSES), Task.due_date >= today)
        .order_by(Task.due_date.asc())
        .limit(5)
    )

    return DashboardResponse(
        files=files,
        clients=ClientCounts(total_clients=total_clients, active_clients=active_clients),
        tasks=TaskStats(
            total_tasks=task_row[0],
            pending_tasks=task_row[1],
            in_progress_tasks=task_row[2],
            completed_tasks=task_row[3],
        ),
        financial=FinancialStats(
            total_recovered=as_float(financial_row[0]),
            total_expenses=as_float(financial_row[1]),
            total_net_commission=as_float(financial_row[2]),
        ),
        recent_files=[file_to_response(file, paid) for file, paid in recent.all()],
        upcoming_tasks=[TaskResponse.model_validate(task) for task in upcoming.scalars().all()],
    )


async def client_statistics(db: AsyncSession) -> list[ClientStatisticsRow]:
    """Per-client aggregates, largest total debt first"""
    total_debt = func.coalesce(func.sum(DebtFile.total_amount), 0)
    recovered = func.coalesce(func.sum(PaidFile.recovered_amount), 0)
    result = await db.execute(
        select(
            Client.id,
            Client.name,
            func.count(DebtFile.id),
            total_debt.label("total_debt"),
            recovered,
            func.coalesce(func.sum(PaidFile.expenses), 0),
            func.coalesce(func.sum(PaidFile.client_rights), 0),
            func.coalesce(func.sum(PaidFile.net_commission), 0),
            func.coalesce(func.sum(PaidFile.due_balance), 0),
        )
        .outerjoin(DebtFile, DebtFile.client_id == Client.id)
        .outerjoin(PaidFile, PaidFile.file_id == DebtFile.id)
        .group_by(Client.id, Client.name)
        .order_by(total_debt.desc())
    )
    rows = []
    for client_id, name, file_count, debt, recovered_amount, expenses, rights, commission, due in result.all():
        debt = as_float(debt)
        recovered_amount = as_float(recovered_amount)
        rows.append(
            ClientStatisticsRow(
                client_id=str(client_id),
                client_name=name,
                file_count=file_count,
                total_debt=debt,
                recovered_amount=recovered_amount,
                total_expenses=as_float(expenses),
                client_rights=as_float(rights),
                recovery_rate=(recovered_amount / debt * 100) if debt > 0 else 0.0,
                net_commission=as_float(commission),
                due_balance=as_float(due),
            )
        )
    return rows


async def monthly_statistics(db: AsyncSession, year: int) -> list[MonthlyStatisticsRow]:
    """Files opened per month of a year with their recovery figures"""
    year_col = extract("year", DebtFile.created_at)
    month_col = extract("month", DebtFile.created_at)
    result = await db.execute(
        select(
            month_col.label("month"),
            func.count(DebtFile.id),
            func.coalesce(func.sum(DebtFile.total_amount), 0),
            func.coalesce(func.sum(PaidFile.recovered_amount), 0),
            func.coalesce(func.sum(PaidFile.expenses), 0),
            func.coalesce(func.sum(PaidFile.net_commission), 0),
        )
        .outerjoin(PaidFile, PaidFile.file_id == DebtFile.id)
        .where(year_col == year)
        .group_by(month_col)
        .order_by(month_col)
    )
    return [
        MonthlyStatisticsRow(
            year=year,
            month=int(month),
            files_count=count,
            total_debt=as_float(debt),
            recovered_amount=as_float(recovered),
            expenses=as_float(expenses),
            net_commission=as_float(commission),
        )
        for month, count, debt, recovered, expenses, commission in result.all()
    ]
