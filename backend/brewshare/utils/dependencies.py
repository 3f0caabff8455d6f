"""Authentication dependencies for FastAPI"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import AuthenticationRequired
from ..models import User
from ..services.revocation import TokenRevocationList
from .auth import SessionClaims, verify_session_token
from .database import get_db


@lru_cache()
def _revocation_list() -> TokenRevocationList:
    return TokenRevocationList()


def get_revocation_list() -> Optional[TokenRevocationList]:
    """Deny-list dependency; None when revocation is disabled"""
    if not settings.TOKEN_REVOCATION_ENABLED:
        return None
    return _revocation_list()


async def get_session_claims(
    request: Request,
    revocation_list: Optional[TokenRevocationList] = Depends(get_revocation_list)
) -> SessionClaims:
    """
    Validate the session cookie of the current request

    Args:
        request: Incoming request
        revocation_list: Optional token deny-list

    Returns:
        Verified session claims

    Raises:
        AuthenticationRequired: If the cookie is missing, invalid, expired or revoked
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise AuthenticationRequired()

    claims = verify_session_token(token)

    if revocation_list is not None and revocation_list.is_revoked(claims.jti):
        raise AuthenticationRequired()

    return claims


async def get_current_user(
    claims: SessionClaims = Depends(get_session_claims),
    db: Session = Depends(get_db)
) -> User:
    """
    Get the current authenticated user from the session cookie

    Raises:
        AuthenticationRequired: If the account behind the token no longer exists
    """
    user = db.query(User).filter(User.id == claims.user_id).first()
    if user is None:
        raise AuthenticationRequired()

    return user
