"""Clients API - Debt-recovery agency customers

Endpoints:
- GET /clients - List clients
- POST /clients - Create a client with portal credentials
- PUT /clients/{client_id} - Update a client
- GET /clients/{client_id}/files - Files of a client with their expenses
- GET /clients/{client_id}/stats - Recovery figures of a client
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users.password import PasswordHelper
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import Client, User
from app.models.notification import NotificationType
from app.schemas.client import ClientCreate, ClientListResponse, ClientResponse, ClientStatsResponse, ClientUpdate
from app.schemas.debt_file import FileResponse
from app.services import stats_service
from app.services.notification_service import notify_staff, render_client_created
from app.users import staff_user
from app.utils.credentials import generate_login, generate_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])

password_helper = PasswordHelper()


async def get_client_or_404(db: AsyncSession, client_id: UUID) -> Client:
    result = await db.execute(select(Client).where(Client.id == client_id))
    client = result.scalar_one_or_none()
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.get("", response_model=ClientListResponse)
async def list_clients(
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientListResponse:
    """List all clients, newest first"""
    result = await db.execute(select(Client).order_by(Client.created_at.desc()))
    clients = result.scalars().all()
    return ClientListResponse(clients=[ClientResponse.model_validate(c) for c in clients], total=len(clients))


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a client

    Login and password are generated when not provided. Every admin and employee is
    notified with the credentials (link /clients/{id}).

    Raises:
        409: A client with the same login or name already exists
    """
    login = data.login or generate_login(data.name)
    password = data.password or generate_password()

    existing = await db.execute(
        select(Client.id).where(or_(Client.login == login, func.lower(Client.name) == data.name.lower()))
    )
    if existing.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="A client with this name or login already exists"
        )

    client = Client(
        name=data.name,
        email=data.email,
        phone=data.phone,
        address=data.address,
        cin=data.cin,
        login=login,
        hashed_password=password_helper.hash(password),
    )
    db.add(client)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="A client with this name or login already exists"
        ) from e
    await db.refresh(client)
    client_id = client.id
    logger.info(f"Client {client.id} created by {current_user.id}")

    # Best-effort: the client exists even if notifying staff fails
    try:
        await notify_staff(
            db,
            type=NotificationType.CLIENT_CREATED,
            link=f"/clients/{client.id}",
            render=lambda language: render_client_created(
                client_name=client.name, login=login, password=password, language=language
            ),
        )
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error(f"Failed to notify staff about client {client_id}", exc_info=True)
        await db.refresh(client)

    return client


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    data: ClientUpdate,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a client. Only provided fields change."""
    client = await get_client_or_404(db, client_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(client, field, value)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A client with this name already exists") from e
    await db.refresh(client)
    return client


@router.get("/{client_id}/files", response_model=list[FileResponse])
async def get_client_files(
    client_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Files of a client, newest first, each with its total expenses"""
    await get_client_or_404(db, client_id)
    return await stats_service.client_files(db, client_id)


@router.get("/{client_id}/stats", response_model=ClientStatsResponse)
async def get_client_stats(
    client_id: UUID,
    current_user: Annotated[User, Depends(staff_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Total files, total debt, amount of closed files and share of closed files"""
    await get_client_or_404(db, client_id)
    return await stats_service.client_stats(db, client_id)
