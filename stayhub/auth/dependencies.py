"""FastAPI authentication dependencies for route protection."""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.auth.security import ACCESS, decode_token
from stayhub.database import get_db
from stayhub.models.user import User

# Strict bearer: FastAPI answers 403 when the header is missing
_bearer_scheme = HTTPBearer()


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Validate the Bearer access token and return its user.

    Raises:
        HTTPException 401: If the token is invalid, expired, of the wrong type,
            or its user is missing or inactive.
    """
    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise _credentials_error() from None

    if payload.get("type") != ACCESS:
        raise _credentials_error("Invalid token type")

    try:
        user_id = uuid.UUID(payload.get("sub") or "")
    except ValueError:
        raise _credentials_error() from None

    user = await db.get(User, user_id)
    if user is None:
        raise _credentials_error()
    if not user.is_active:
        raise _credentials_error("User account is inactive")
    return user
