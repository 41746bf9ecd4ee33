"""Expenses API - Expense types and expenses booked on files"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.files import get_file_or_404
from app.database import get_db
from app.models import ExpenseType, FileExpense, User
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseTypeResponse, FileExpensesResponse
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


def _expense_response(expense: FileExpense, type_name: str | None) -> ExpenseResponse:
    response = ExpenseResponse.model_validate(expense)
    response.expense_type_name = type_name
    return response


@router.get("/types", response_model=list[ExpenseTypeResponse])
async def list_expense_types(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """All expense types, by name"""
    result = await db.execute(select(ExpenseType).order_by(ExpenseType.name))
    return result.scalars().all()


@router.get("/file/{file_id}", response_model=FileExpensesResponse)
async def get_file_expenses(
    file_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FileExpensesResponse:
    """Expenses of a file, newest first, with their sum"""
    await get_file_or_404(db, file_id)

    result = await db.execute(
        select(FileExpense, ExpenseType.name)
        .join(ExpenseType, FileExpense.expense_type_id == ExpenseType.id)
        .where(FileExpense.file_id == file_id)
        .order_by(FileExpense.expense_date.desc(), FileExpense.created_at.desc())
    )
    expenses = [_expense_response(expense, type_name) for expense, type_name in result.all()]
    return FileExpensesResponse(expenses=expenses, total=sum(e.amount for e in expenses))


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    data: ExpenseCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ExpenseResponse:
    """Book an expense on a file

    Raises:
        404: File or expense type not found
    """
    await get_file_or_404(db, data.file_id)
    result = await db.execute(select(ExpenseType).where(ExpenseType.id == data.expense_type_id))
    expense_type = result.scalar_one_or_none()
    if not expense_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense type not found")

    expense = FileExpense(**data.model_dump(), created_by=current_user.id)
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return _expense_response(expense, expense_type.name)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(select(FileExpense).where(FileExpense.id == expense_id))
    expense = result.scalar_one_or_none()
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")

    await db.delete(expense)
    await db.commit()
    logger.info(f"Expense {expense_id} deleted by {current_user.id}")
