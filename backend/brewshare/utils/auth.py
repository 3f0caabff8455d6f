"""Password hashing, session tokens and the session cookie"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config import settings
from ..exceptions import InvalidToken

ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a verified session token"""

    user_id: int
    email: str
    jti: str
    expires_at: datetime


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT access token

    Args:
        data: Claims to embed
        expires_delta: Validity window (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded token
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = data.copy()
    to_encode.update({
        "exp": expire,
        "iat": now,
        "jti": uuid.uuid4().hex,
        "type": "access",
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a token's signature and expiry

    Raises:
        InvalidToken: If the signature does not match or the token expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise InvalidToken()


def issue_session_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a session token embedding the user's id and email"""
    return create_access_token({"user_id": user.id, "email": user.email}, expires_delta)


def verify_session_token(token: str) -> SessionClaims:
    """
    Verify a session token and return its claims

    Raises:
        InvalidToken: On bad signature, expiry, wrong type or missing claims
    """
    payload = decode_token(token)

    if payload.get("type") != "access":
        raise InvalidToken()

    user_id = payload.get("user_id")
    email = payload.get("email")
    jti = payload.get("jti")
    if not isinstance(user_id, int) or not email or not jti:
        raise InvalidToken()

    return SessionClaims(
        user_id=user_id,
        email=email,
        jti=jti,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def _cookie_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "httponly": True,
        "samesite": "none" if settings.IS_PRODUCTION else "lax",
        "secure": settings.IS_PRODUCTION,
        "path": "/",
    }
    if settings.COOKIE_DOMAIN:
        options["domain"] = settings.COOKIE_DOMAIN
    return options


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie"""
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **_cookie_options()
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client; the token itself stays valid"""
    response.delete_cookie(key=settings.COOKIE_NAME, **_cookie_options())
