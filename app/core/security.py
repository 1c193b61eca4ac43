# app/core/security.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from jose import JWTError, jwt

from app.core.config import Settings, get_settings
from app.core.errors import Unauthorized


@dataclass(frozen=True)
class Principal:
    """Authenticated identity resolved from a bearer credential.

    Only the external id is kept; roles come from the matching ``usuario`` row.
    """

    id: str


def create_access_token(
    subject: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
    **claims,
) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode = {"sub": subject, "exp": expire, **claims}
    if settings.AUTH_JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Principal:
    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except JWTError:
        raise Unauthorized()

    subject = payload.get("sub")
    if not subject:
        raise Unauthorized()
    return Principal(id=str(subject))


def get_principal(request: Request, settings: Settings = Depends(get_settings)) -> Principal:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise Unauthorized()

    try:
        scheme, token = auth_header.split()
    except ValueError:
        raise Unauthorized()
    if scheme.lower() != "bearer":
        raise Unauthorized()

    return decode_access_token(token, settings)
