"""FastAPI Users Configuration

Sets up staff user management and JWT authentication with the fastapi-users library,
role checks for admin/employee endpoints, and the separate client-portal principal.
"""

import logging
import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi_users import BaseUserManager, FastAPIUsers, UUIDIDMixin, models
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.client import Client
from app.models.user import User, UserRole
from app.utils.security import CLIENT_TOKEN_AUDIENCE, decode_access_token

logger = logging.getLogger(__name__)


async def get_user_db(session: AsyncSession = Depends(get_db)) -> SQLAlchemyUserDatabase[User, uuid.UUID]:
    """Database adapter for fastapi-users"""
    yield SQLAlchemyUserDatabase(session, User)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    """Staff user manager"""

    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def on_after_login(self, user: User, request: Request | None = None, response=None):
        """Called after a successful staff login"""
        logger.info(f"User {user.id} logged in (role={user.role})")


async def get_user_manager(
    user_db: SQLAlchemyUserDatabase[User, uuid.UUID] = Depends(get_user_db),
) -> BaseUserManager[User, uuid.UUID]:
    """Dependency to get user manager"""
    yield UserManager(user_db)


# JWT Authentication Backend
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/login")


def get_jwt_strategy() -> JWTStrategy[models.UP, models.ID]:
    """JWT authentication strategy"""
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        algorithm=settings.ALGORITHM,
    )


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

# Dependency for authenticated routes
current_active_user = fastapi_users.current_user(active=True)


def require_roles(*roles: UserRole):
    """Build a dependency that only lets staff with one of the given roles through

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def checker(current_user: Annotated[User, Depends(current_active_user)]) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied: insufficient permissions",
            )
        return current_user

    return checker


# Shortcuts used by the routers
staff_user = require_roles(UserRole.ADMIN, UserRole.EMPLOYEE)
admin_user = require_roles(UserRole.ADMIN)


# --- Client portal principal ---

client_bearer = HTTPBearer(auto_error=False)


async def current_client(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(client_bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Client:
    """Resolve the client behind a client-portal bearer token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_access_token(credentials.credentials, audience=CLIENT_TOKEN_AUDIENCE)
        client_id = uuid.UUID(payload.get("sub", ""))
    except (JWTError, ValueError) as e:
        logger.debug(f"Client token validation failed: {e}")
        raise credentials_exception from e

    result = await db.execute(select(Client).where(Client.id == client_id))
    client = result.scalar_one_or_none()
    if client is None:
        raise credentials_exception
    return client
