from typing import Optional
import logging

from tasknest.auth.passwords import DUMMY_HASH, hash_password, verify_password
from tasknest.errors import AuthError, ValidationError
from tasknest.sessions.models import Session
from tasknest.sessions.service import SessionService
from tasknest.users.models import User
from tasknest.users.repository import UserRepositoryInterface

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and logout on top of the user and session stores."""

    def __init__(self, user_repository: UserRepositoryInterface, session_service: SessionService):
        self.user_repository = user_repository
        self.session_service = session_service

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create a user account. Raises ValidationError if the email is taken."""
        if await self.user_repository.exists_by_email(email):
            raise ValidationError("Email already registered")

        user = User.create(name=name, email=email, password_hash=hash_password(password))
        await self.user_repository.create(user)
        logger.info(f"User {user.id} created")
        return user

    async def register(self, name: str, email: str, password: str) -> tuple[User, Session]:
        """Create an account and open its first session."""
        user = await self.create_user(name=name, email=email, password=password)
        session = await self.session_service.create(user.id, user.email)
        return user, session

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Return the user if the password matches, else None."""
        user = await self.user_repository.get_by_email(email)
        if user is None:
            verify_password(password, DUMMY_HASH)
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def login(self, email: str, password: str) -> tuple[User, Session]:
        """Authenticate and open a new session. No session is created on failure."""
        user = await self.authenticate_user(email, password)
        if user is None:
            logger.info("Login failed: invalid credentials")
            raise AuthError("Invalid credentials")

        session = await self.session_service.create(user.id, user.email)
        logger.info(f"User {user.id} logged in")
        return user, session

    async def logout(self, token: str) -> None:
        """Delete the session row for this token. The token itself stays valid until it expires."""
        await self.session_service.delete_by_token(token)
        logger.info("Session closed by logout")

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.user_repository.get_by_id(user_id)
