"""Case Types API - Reference list of legal case types"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Case, CaseType, User
from app.schemas.case import CaseTypeCreate, CaseTypeResponse
from app.users import admin_user, staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/case-types", tags=["case-types"])


@router.get("", response_model=list[CaseTypeResponse])
async def list_case_types(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(select(CaseType).order_by(CaseType.name))
    return result.scalars().all()


@router.post("", response_model=CaseTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_case_type(
    data: CaseTypeCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a case type

    Raises:
        409: Name already used
    """
    name = data.name.strip()
    existing = await db.execute(select(CaseType.id).where(CaseType.name == name))
    if existing.first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Case type already exists")

    case_type = CaseType(name=name, description=data.description, created_by=current_user.id)
    db.add(case_type)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Case type already exists") from e
    await db.refresh(case_type)
    return case_type


@router.delete("/{case_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case_type(
    case_type_id: UUID,
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a case type

    Raises:
        400: Cases still use this type
        404: Case type not found
    """
    result = await db.execute(select(CaseType).where(CaseType.id == case_type_id))
    case_type = result.scalar_one_or_none()
    if not case_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case type not found")

    in_use = await db.execute(select(Case.id).where(Case.case_type_id == case_type_id).limit(1))
    if in_use.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Case type is used by existing cases and cannot be deleted"
        )

    await db.delete(case_type)
    await db.commit()
    logger.info(f"Case type {case_type_id} deleted by {current_user.id}")
