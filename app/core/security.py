"""Single-account login and bearer token handling.

The account is configured through ``EMAIL`` and ``PW_HASH`` (bcrypt);
tokens are HS256 JWTs signed with ``TOKEN_KEY``.

Usage:
    @app.get("/protected", dependencies=[Depends(require_token)])
    def protected_endpoint():
        ...
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        logger.error("Configured PW_HASH is not a valid bcrypt hash")
        return False


def authenticate(email: str, password: str, settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    if not settings.email or email != settings.email:
        return False
    return verify_password(password, settings.pw_hash)


def _signing_key(settings: Settings) -> str:
    if not settings.token_key:
        raise HTTPException(500, "TOKEN_KEY is not configured")
    return settings.token_key


def create_token(subject: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    expires = datetime.now(tz=timezone.utc) + timedelta(minutes=settings.token_ttl_minutes)
    claims = {"sub": subject, "exp": int(expires.timestamp())}
    return jwt.encode(claims, _signing_key(settings), algorithm=ALGORITHM)


def decode_token(token: str, settings: Optional[Settings] = None, verify_exp: bool = True) -> Dict[str, Any]:
    settings = settings or get_settings()
    return jwt.decode(
        token,
        _signing_key(settings),
        algorithms=[ALGORITHM],
        options={"verify_exp": verify_exp},
    )


def refresh_token(token: str, settings: Optional[Settings] = None) -> str:
    """Issue a new token for one that expires soon or expired recently."""
    settings = settings or get_settings()
    try:
        claims = decode_token(token, settings, verify_exp=False)
    except JWTError:
        raise HTTPException(401, "Unauthorized")

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        raise HTTPException(401, "Unauthorized")
    remaining = exp - datetime.now(tz=timezone.utc).timestamp()
    if remaining > settings.token_refresh_window_seconds:
        raise HTTPException(400, "token still valid")
    if remaining < -settings.token_refresh_grace_seconds:
        raise HTTPException(401, "token expired")
    return create_token(claims.get("sub") or settings.email, settings)


def bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise HTTPException(401, "Unauthorized")
    return credentials.credentials


def require_token(token: str = Depends(bearer_token)) -> Dict[str, Any]:
    try:
        return decode_token(token)
    except ExpiredSignatureError:
        raise HTTPException(401, "token expired")
    except JWTError:
        raise HTTPException(401, "Unauthorized")


__all__ = [
    "authenticate",
    "bearer_token",
    "create_token",
    "decode_token",
    "hash_password",
    "refresh_token",
    "require_token",
    "verify_password",
]
