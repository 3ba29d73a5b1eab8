"""
TASKNEST API - User Service

Profile reads and writes. Everything addressed by user id is self-only:
the id is compared to the caller before the store is touched.
"""

from typing import List
import logging

from tasknest.auth.ownership import ensure_self
from tasknest.auth.passwords import hash_password
from tasknest.errors import NotFoundError, ValidationError
from tasknest.sessions.repository import SessionRepositoryInterface
from tasknest.tasks.repository import TaskRepositoryInterface
from tasknest.users.models import User
from tasknest.users.repository import UserRepositoryInterface
from tasknest.users.schemas import UserUpdateRequest

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user records."""

    def __init__(
        self,
        repository: UserRepositoryInterface,
        session_repository: SessionRepositoryInterface,
        task_repository: TaskRepositoryInterface,
    ):
        self.repository = repository
        self.session_repository = session_repository
        self.task_repository = task_repository

    async def list_users(self) -> List[User]:
        return await self.repository.list_all()

    async def get_user(self, user_id: str, subject: str) -> User:
        ensure_self(user_id, subject)
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, user_id: str, subject: str, request: UserUpdateRequest) -> User:
        ensure_self(user_id, subject)
        current = await self.repository.get_by_id(user_id)
        if current is None:
            raise NotFoundError("User not found")

        updates: dict = {}
        if request.name is not None:
            updates["name"] = request.name
        if request.email is not None and request.email.lower() != current.email:
            if await self.repository.exists_by_email(request.email):
                raise ValidationError("Email already registered")
            updates["email"] = request.email
        if request.password is not None:
            updates["password_hash"] = hash_password(request.password)

        if not updates:
            return current

        user = await self.repository.update(user_id, updates)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def delete_user(self, user_id: str, subject: str) -> None:
        """Delete the caller's account along with their tasks and sessions."""
        ensure_self(user_id, subject)
        if not await self.repository.delete(user_id):
            raise NotFoundError("User not found")

        tasks = await self.task_repository.delete_by_owner(user_id)
        sessions = await self.session_repository.delete_by_user(user_id)
        logger.info(f"User {user_id} deleted ({tasks} tasks, {sessions} sessions)")
