"""JWT helpers shared by the staff refresh endpoint and the client portal login

Staff tokens carry the fastapi-users audience so they are accepted by the
fastapi-users JWT strategy. Client tokens use their own audience so a client token can
never authenticate a staff endpoint (and vice versa).
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt

from app.config import settings

STAFF_TOKEN_AUDIENCE = "fastapi-users:auth"
CLIENT_TOKEN_AUDIENCE = "office:client"


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    audience: str = STAFF_TOKEN_AUDIENCE,
) -> str:
    """Create a signed JWT

    Args:
        data: Claims to encode (must contain "sub")
        expires_delta: Token lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)
        audience: "aud" claim

    Returns:
        Encoded JWT string
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "aud": [audience]})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, audience: str) -> dict[str, Any]:
    """Decode and verify a JWT for the given audience

    Raises:
        jose.JWTError: Invalid signature, expired token or wrong audience
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM], audience=audience)
