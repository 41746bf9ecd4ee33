"""Client Portal API - Read-only views for the logged-in client

Every endpoint is restricted to rows of the client behind the portal token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.cases import case_to_response, cases_query
from app.database import get_db
from app.models import Case, Client, Document
from app.schemas.case import CaseListResponse
from app.schemas.client import ClientResponse, ClientStatsResponse
from app.schemas.debt_file import FileListResponse
from app.schemas.document import DocumentListResponse
from app.services import stats_service
from app.users import current_client

router = APIRouter(prefix="/api/v1/portal", tags=["portal"])


@router.get("/me", response_model=ClientResponse)
async def portal_me(client: Annotated[Client, Depends(current_client)]):
    return client


@router.get("/files", response_model=FileListResponse)
async def portal_files(
    client: Annotated[Client, Depends(current_client)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FileListResponse:
    """The client's files with recovery figures and expenses"""
    files = await stats_service.client_files(db, client.id)
    return FileListResponse(files=files, total=len(files))


@router.get("/stats", response_model=ClientStatsResponse)
async def portal_stats(
    client: Annotated[Client, Depends(current_client)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await stats_service.client_stats(db, client.id)


@router.get("/cases", response_model=CaseListResponse)
async def portal_cases(
    client: Annotated[Client, Depends(current_client)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CaseListResponse:
    result = await db.execute(cases_query().where(Case.client_id == client.id).order_by(Case.created_at.desc()))
    cases = [case_to_response(case, type_name) for case, type_name in result.all()]
    return CaseListResponse(cases=cases, total=len(cases))


@router.get("/documents", response_model=DocumentListResponse)
async def portal_documents(
    client: Annotated[Client, Depends(current_client)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    result = await db.execute(
        select(Document).where(Document.client_id == client.id).order_by(Document.created_at.desc())
    )
    documents = result.scalars().all()
    return DocumentListResponse(documents=list(documents), total=len(documents))
