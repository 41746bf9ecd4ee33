"""Users API - Staff account management (admin only)

Endpoints:
- GET /users - List staff users
- POST /users - Create a staff user (generated password returned once)
- PUT /users/{user_id} - Update a staff user
- DELETE /users/{user_id} - Delete a staff user
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users.password import PasswordHelper
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models import User
from app.schemas.user import StaffUserCreate, StaffUserCreatedResponse, StaffUserUpdate, UserListResponse, UserRead
from app.users import admin_user
from app.utils.credentials import generate_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])

password_helper = PasswordHelper()


async def _get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: UUID | None = None) -> None:
    query = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude_id:
        query = query.where(User.id != exclude_id)
    if (await db.execute(query)).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A user with this email already exists")


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserListResponse:
    """List all staff users, newest first"""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    users = result.scalars().all()
    return UserListResponse(users=[UserRead.model_validate(user, from_attributes=True) for user in users], total=len(users))


@router.post("", response_model=StaffUserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: StaffUserCreate,
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StaffUserCreatedResponse:
    """Create a staff user with a generated password

    The password is only returned in this response.

    Raises:
        409: Email already used
    """
    await _ensure_email_free(db, data.email)

    password = generate_password()
    user = User(
        email=data.email,
        hashed_password=password_helper.hash(password),
        name=data.name,
        phone=data.phone,
        role=data.role,
        language=data.language,
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A user with this email already exists") from e
    await db.refresh(user)

    logger.info(f"User {user.id} created by {current_user.id} (role={user.role})")
    return StaffUserCreatedResponse(
        **UserRead.model_validate(user, from_attributes=True).model_dump(),
        password=password,
    )


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: UUID,
    data: StaffUserUpdate,
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a staff user. Only provided fields change.

    Raises:
        404: User not found
        409: Email already used by another user
    """
    user = await _get_user_or_404(db, user_id)

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("email"):
        await _ensure_email_free(db, update_data["email"], exclude_id=user_id)

    for field, value in update_data.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    current_user: Annotated[User, Depends(admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a staff user

    Raises:
        400: Admin tries to delete their own account
        404: User not found
    """
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")

    user = await _get_user_or_404(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info(f"User {user_id} deleted by {current_user.id}")
