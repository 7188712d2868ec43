import logging
from typing import Optional
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.core.exceptions import (
    AuthenticationError, AuthorizationError, ConflictError, InternalError
)
from goods_transport.core.security import get_password_hash, verify_password, create_session_token
from goods_transport.models.auth.user import User
from goods_transport.models.shared.enums import UserRole
from goods_transport.schemas.auth.auth_schema import SignupRequest, LoginRequest

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: int) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def signup(self, data: SignupRequest) -> User:
        """
        Register a user account.

        The very first account is always created as SUPERADMIN whatever role
        was requested; afterwards nobody can sign up as SUPERADMIN.
        """
        try:
            user_count = await self.session.scalar(select(func.count()).select_from(User))
            role = data.role
            if user_count == 0:
                role = UserRole.SUPERADMIN
            elif role == UserRole.SUPERADMIN:
                logger.warning(f"Rejected SUPERADMIN signup for {data.username}")
                raise AuthorizationError(
                    "Authorization required: SUPERADMIN accounts cannot be self-registered."
                )

            existing = await self.session.execute(select(User).where(User.username == data.username))
            if existing.scalar_one_or_none():
                raise ConflictError(f"Username '{data.username}' is already taken.")

            user = User(
                username=data.username,
                hashed_password=get_password_hash(data.password),
                role=role,
            )
            self.session.add(user)
            await self.session.commit()
            await self.session.refresh(user)

            logger.info(f"User {user.username} signed up with role {user.role.value}")
            return user

        except (AuthorizationError, ConflictError):
            raise
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"Username '{data.username}' is already taken.")
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error signing up user {data.username}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create user.")

    async def login(self, data: LoginRequest) -> tuple:
        """Verify credentials and return the user together with a fresh session token"""
        result = await self.session.execute(select(User).where(User.username == data.username))
        user = result.scalar_one_or_none()

        if not user or not verify_password(data.password, user.hashed_password):
            logger.warning(f"Failed login attempt for {data.username}")
            raise AuthenticationError("Invalid username or password.")

        token = create_session_token({"sub": str(user.id), "role": user.role.value})
        logger.info(f"User {user.username} logged in")
        return user, token
