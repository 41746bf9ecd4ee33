"""
Authentication Endpoints
Staff login/logout via fastapi-users, token refresh, current user, and client-portal login
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users.password import PasswordHelper
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.client import Client
from app.models.user import User
from app.schemas.auth import ClientLoginRequest, ClientLoginResponse, ClientPrincipal, TokenResponse
from app.schemas.user import UserRead
from app.users import auth_backend, current_active_user, fastapi_users
from app.utils.security import CLIENT_TOKEN_AUDIENCE, create_access_token

router = APIRouter(tags=["auth"])

password_helper = PasswordHelper()

# JWT Authentication router (login/logout)
# fastapi-users creates /login and /logout; the /api/v1/auth prefix comes from main.py
router.include_router(
    fastapi_users.get_auth_router(auth_backend, requires_verification=False),
)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    current_user: Annotated[User, Depends(current_active_user)],
) -> TokenResponse:
    """
    Refresh access token for authenticated staff user.

    Requires valid (not expired) access token in Authorization header.
    Returns new access token with full TTL.
    """
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    new_token = create_access_token(
        data={"sub": str(current_user.id)},
        expires_delta=expires_delta,
    )

    return TokenResponse(
        access_token=new_token,
        token_type="bearer",
        expires_in=int(expires_delta.total_seconds()),
    )


@router.get("/me", response_model=UserRead)
async def get_me(current_user: Annotated[User, Depends(current_active_user)]):
    """Current staff user"""
    return current_user


@router.post("/client-login", response_model=ClientLoginResponse)
async def client_login(
    data: ClientLoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClientLoginResponse:
    """Client portal login with the generated (or chosen) login and password

    Raises:
        401: Unknown login or wrong password
    """
    result = await db.execute(select(Client).where(Client.login == data.login))
    client = result.scalar_one_or_none()

    invalid = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid login or password")
    if not client or not client.hashed_password:
        raise invalid

    verified, updated_hash = password_helper.verify_and_update(data.password, client.hashed_password)
    if not verified:
        raise invalid

    # Upgrade the stored hash if the hashing scheme changed
    if updated_hash is not None:
        client.hashed_password = updated_hash
        await db.commit()

    expires_delta = timedelta(minutes=settings.CLIENT_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        data={"sub": str(client.id), "type": "client"},
        expires_delta=expires_delta,
        audience=CLIENT_TOKEN_AUDIENCE,
    )

    return ClientLoginResponse(
        access_token=token,
        expires_in=int(expires_delta.total_seconds()),
        client=ClientPrincipal(id=client.id, name=client.name, email=client.email, login=client.login),
    )
