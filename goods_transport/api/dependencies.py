import logging
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.auth.permissions import Permission, policy_engine
from goods_transport.core.config import settings
from goods_transport.core.database import get_async_session
from goods_transport.core.exceptions import AuthenticationError
from goods_transport.core.security import verify_token
from goods_transport.models.auth.user import User
from goods_transport.services.auth.auth_service import AuthService

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_async_session)
) -> User:
    """Resolve the signed-in user from the session cookie"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Authentication required: No active session.")

    payload = verify_token(token)
    if payload is None or payload.get("type") != "session":
        raise AuthenticationError("Authentication required: Invalid or expired session.")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Authentication required: Invalid or expired session.")

    user = await AuthService(session).get_user(user_id)
    if user is None:
        raise AuthenticationError("Authentication required: User no longer exists.")

    request.state.current_user = user
    return user


def require_permission(permission: Permission):
    """Dependency factory gating an endpoint on one permission"""
    async def permission_dependency(current_user: User = Depends(get_current_user)) -> User:
        policy_engine.require(current_user.role, permission)
        return current_user

    return permission_dependency
