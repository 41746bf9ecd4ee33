"""Debt-Recovery Files API

Endpoints:
- GET /files - List files (filter by status and client)
- GET /files/{file_id} - Get one file
- POST /files - Create a file
- PUT /files/{file_id} - Update a file
- POST /files/{file_id}/move-to-paid - Record the settlement and close the file
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.clients import get_client_or_404
from app.database import get_db
from app.models import DebtFile, FileStatus, PaidFile, User
from app.schemas.debt_file import (
    FileCreate,
    FileListResponse,
    FileResponse,
    FileUpdate,
    MoveToPaidRequest,
    PaidFileResponse,
)
from app.services.stats_service import file_to_response
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/files", tags=["files"])


async def get_file_or_404(db: AsyncSession, file_id: UUID) -> DebtFile:
    result = await db.execute(select(DebtFile).where(DebtFile.id == file_id))
    file = result.scalar_one_or_none()
    if not file:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return file


async def _paid_record(db: AsyncSession, file_id: UUID) -> PaidFile | None:
    result = await db.execute(select(PaidFile).where(PaidFile.file_id == file_id))
    return result.scalar_one_or_none()


@router.get("", response_model=FileListResponse)
async def list_files(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    status_filter: Annotated[FileStatus | None, Query(alias="status")] = None,
    client_id: UUID | None = None,
) -> FileListResponse:
    """List files, newest first, with recovered amount and recovery percentage"""
    query = select(DebtFile, PaidFile).outerjoin(PaidFile, PaidFile.file_id == DebtFile.id)
    if status_filter:
        query = query.where(DebtFile.status == status_filter)
    if client_id:
        query = query.where(DebtFile.client_id == client_id)

    result = await db.execute(query.order_by(DebtFile.created_at.desc()))
    files = [file_to_response(file, paid) for file, paid in result.all()]
    return FileListResponse(files=files, total=len(files))


@router.get("/{file_id}", response_model=FileResponse)
async def get_file(
    file_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    file = await get_file_or_404(db, file_id)
    return file_to_response(file, await _paid_record(db, file_id))


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def create_file(
    data: FileCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a file (status new)

    Raises:
        404: Client not found
    """
    await get_client_or_404(db, data.client_id)

    file = DebtFile(**data.model_dump(), status=FileStatus.NEW, created_by=current_user.id)
    db.add(file)
    await db.commit()
    await db.refresh(file)
    logger.info(f"File {file.id} created for client {file.client_id}")
    return file_to_response(file)


@router.put("/{file_id}", response_model=FileResponse)
async def update_file(
    file_id: UUID,
    data: FileUpdate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a file. Only provided fields change."""
    file = await get_file_or_404(db, file_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(file, field, value)

    await db.commit()
    await db.refresh(file)
    return file_to_response(file, await _paid_record(db, file_id))


@router.post("/{file_id}/move-to-paid", response_model=PaidFileResponse, status_code=status.HTTP_201_CREATED)
async def move_to_paid(
    file_id: UUID,
    data: MoveToPaidRequest,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record the settlement of a file and close it

    Raises:
        404: File not found
        409: File already moved to paid
    """
    file = await get_file_or_404(db, file_id)
    if await _paid_record(db, file_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="File already moved to paid")

    paid = PaidFile(file_id=file_id, **data.model_dump())
    db.add(paid)
    file.status = FileStatus.CLOSED
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="File already moved to paid") from e
    await db.refresh(paid)
    logger.info(f"File {file_id} moved to paid by {current_user.id}")
    return paid
