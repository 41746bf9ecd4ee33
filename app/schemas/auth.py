"""Auth Schemas - Token and client-portal login models"""

from uuid import UUID

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """Token response matching login endpoint format"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until expiration


class ClientLoginRequest(BaseModel):
    """Client portal login"""

    login: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ClientPrincipal(BaseModel):
    """Client identity returned with a portal token"""

    id: UUID
    name: str
    email: str | None = None
    login: str


class ClientLoginResponse(TokenResponse):
    """Portal token plus the logged-in client"""

    client: ClientPrincipal
