# goods_transport/api/v1/endpoints/auth/auth.py
import logging
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import get_current_user
from goods_transport.core.config import settings
from goods_transport.core.database import get_async_session
from goods_transport.core.request_context import get_request_context
from goods_transport.models.auth.user import User
from goods_transport.schemas.auth.auth_schema import (
    AuthResponse, LoginRequest, SessionUser, SignupRequest, UserSummary
)
from goods_transport.services.auth.auth_service import AuthService

router = APIRouter()
logger = logging.getLogger(__name__)


def _set_session_cookie(response: Response, value: str, max_age: int = None):
    # No max_age on login: the cookie lives for the browser session
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite=settings.COOKIE_SAMESITE,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Create a user account"""
    user = await AuthService(session).signup(signup_data)
    return AuthResponse(
        message="User created successfully.",
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    response: Response,
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_async_session)
):
    """Verify credentials and start a cookie session"""
    ctx = get_request_context(request)
    user, token = await AuthService(session).login(login_data)
    _set_session_cookie(response, token)
    logger.info(f"Session started for {user.username} {ctx.describe()}")
    return AuthResponse(message="Login successful.", user=UserSummary.model_validate(user))


@router.post("/logout", response_model=AuthResponse)
async def logout(response: Response):
    """End the session by expiring the cookie"""
    _set_session_cookie(response, "", max_age=0)
    return AuthResponse(message="Logout successful.")


@router.get("/session", response_model=SessionUser)
async def current_session(current_user: User = Depends(get_current_user)):
    """Return the signed-in user"""
    return current_user
