"""Case Events API - Hearings, deadlines and meetings of a case

Events carry the reminder lead time used by the daily reminder sweep.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Case, CaseEvent, User
from app.schemas.case import CaseEventCreate, CaseEventListResponse, CaseEventResponse
from app.users import staff_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/case-events", tags=["case-events"])


async def _ensure_case_exists(db: AsyncSession, case_id: UUID) -> None:
    result = await db.execute(select(Case.id).where(Case.id == case_id))
    if not result.first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")


@router.get("/case/{case_id}", response_model=CaseEventListResponse)
async def list_case_events(
    case_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CaseEventListResponse:
    """Events of a case by date, then time"""
    await _ensure_case_exists(db, case_id)
    result = await db.execute(
        select(CaseEvent)
        .where(CaseEvent.case_id == case_id)
        .order_by(CaseEvent.event_date.asc(), CaseEvent.event_time.asc())
    )
    events = result.scalars().all()
    return CaseEventListResponse(events=[CaseEventResponse.model_validate(e) for e in events], total=len(events))


@router.post("", response_model=CaseEventResponse, status_code=status.HTTP_201_CREATED)
async def create_case_event(
    data: CaseEventCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create an event; the caller receives its reminder

    Raises:
        404: Case not found
    """
    await _ensure_case_exists(db, data.case_id)

    event = CaseEvent(**data.model_dump(), reminder_sent=False, created_by=current_user.id)
    db.add(event)
    await db.commit()
    await db.refresh(event)
    logger.info(f"Case event {event.id} scheduled on {event.event_date} (reminder {event.reminder_days} days before)")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case_event(
    event_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(select(CaseEvent).where(CaseEvent.id == event_id))
    event = result.scalar_one_or_none()
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case event not found")

    await db.delete(event)
    await db.commit()
