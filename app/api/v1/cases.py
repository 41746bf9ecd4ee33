"""Cases API - Legal proceedings attached to a client's file"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.clients import get_client_or_404
from app.api.v1.files import get_file_or_404
from app.database import get_db
from app.models import Case, CaseType, User
from app.schemas.case import CaseCreate, CaseListResponse, CaseResponse, CaseUpdate
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])


def case_to_response(case: Case, case_type_name: str | None) -> CaseResponse:
    response = CaseResponse.model_validate(case)
    response.case_type_name = case_type_name
    return response


def cases_query():
    """Cases with their type name"""
    return select(Case, CaseType.name).outerjoin(CaseType, Case.case_type_id == CaseType.id)


async def _get_case_or_404(db: AsyncSession, case_id: UUID) -> tuple[Case, str | None]:
    result = await db.execute(cases_query().where(Case.id == case_id))
    row = result.first()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
    return row[0], row[1]


async def _case_type_name(db: AsyncSession, case_type_id: UUID | None) -> str | None:
    if not case_type_id:
        return None
    result = await db.execute(select(CaseType.name).where(CaseType.id == case_type_id))
    name = result.scalar_one_or_none()
    if name is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case type not found")
    return name


@router.get("/client/{client_id}", response_model=CaseListResponse)
async def list_client_cases(
    client_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CaseListResponse:
    """Cases of a client, newest first"""
    result = await db.execute(cases_query().where(Case.client_id == client_id).order_by(Case.created_at.desc()))
    cases = [case_to_response(case, type_name) for case, type_name in result.all()]
    return CaseListResponse(cases=cases, total=len(cases))


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    case, type_name = await _get_case_or_404(db, case_id)
    return case_to_response(case, type_name)


@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
async def create_case(
    data: CaseCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a case

    Raises:
        400: The file belongs to another client
        404: Client, file or case type not found
    """
    await get_client_or_404(db, data.client_id)
    file = await get_file_or_404(db, data.file_id)
    if file.client_id != data.client_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File does not belong to this client")
    type_name = await _case_type_name(db, data.case_type_id)

    case = Case(**data.model_dump(), created_by=current_user.id)
    db.add(case)
    await db.commit()
    await db.refresh(case)
    logger.info(f"Case {case.id} created for client {case.client_id}")
    return case_to_response(case, type_name)


@router.put("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: UUID,
    data: CaseUpdate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Partial update of a case

    Raises:
        400: No fields to update
        404: Case or case type not found
    """
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    case, type_name = await _get_case_or_404(db, case_id)
    if "case_type_id" in update_data:
        type_name = await _case_type_name(db, update_data["case_type_id"])

    for field, value in update_data.items():
        setattr(case, field, value)

    await db.commit()
    await db.refresh(case)
    return case_to_response(case, type_name)
