"""Authentication API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import AuthenticationRequired, InvalidToken
from ..models import User
from ..schemas.auth import LoginRequest, LoginResponse, MessageResponse, SessionUser
from ..schemas.user import UserCreate, UserPublic, UserResponse
from ..services.revocation import TokenRevocationList
from ..services.users import UserService
from ..utils.auth import (
    clear_session_cookie,
    issue_session_token,
    set_session_cookie,
    verify_session_token,
)
from ..utils.database import get_db
from ..utils.dependencies import get_current_user, get_revocation_list
from ..utils.logging import get_logger
from ..utils.metrics import record_login
from ..utils.rate_limit import limiter

router = APIRouter()
logger = get_logger(__name__)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user

    Creates a new user account with hashed password.
    """
    return UserService(db).register(user)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    response: Response,
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login and receive the session cookie

    The token travels only in an HTTP-only cookie; the body carries the
    caller's public identity.
    """
    user = UserService(db).authenticate(login_data.email, login_data.password)

    if user is None:
        record_login("failure")
        raise AuthenticationRequired("Invalid credentials")

    set_session_cookie(response, issue_session_token(user))
    record_login("success")
    logger.info("Login succeeded", user_id=user.id)

    return LoginResponse(user=SessionUser.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    revocation_list: Optional[TokenRevocationList] = Depends(get_revocation_list)
):
    """
    Logout current user

    Clears the session cookie. The token itself stays valid until it
    expires unless the server-side deny-list is enabled.
    """
    token = request.cookies.get(settings.COOKIE_NAME)

    if token and revocation_list is not None:
        try:
            claims = verify_session_token(token)
        except InvalidToken:
            claims = None
        if claims is not None:
            revocation_list.revoke(claims.jti, claims.expires_at)

    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get current user information

    Returns the authenticated user's full record.
    """
    return current_user
