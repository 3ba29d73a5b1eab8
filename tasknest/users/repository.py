"""
TASKNEST API - User Repository

Repository pattern for user data access: MongoDB for runtime, in-memory
for tests. Emails are stored lower-cased and looked up the same way.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Annotated, List, Optional
import logging

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from tasknest.database import get_database
from tasknest.users.models import User

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if email is already registered."""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """List every user, newest first."""
        pass

    @abstractmethod
    async def update(self, user_id: str, updates: dict) -> Optional[User]:
        """Apply field updates; returns None if the user does not exist."""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete a user; returns False if nothing was deleted."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("email", ASCENDING)], unique=True)
        await self.collection.create_index([("created_at", DESCENDING)])

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except Exception as e:
            logger.error(f"[MongoUserRepository] Error creating user {user.id}: {e}", exc_info=True)
            raise
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email.lower()})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def exists_by_email(self, email: str) -> bool:
        return await self.collection.count_documents({"email": email.lower()}, limit=1) > 0

    async def list_all(self) -> List[User]:
        cursor = self.collection.find({}).sort("created_at", -1)
        users: List[User] = []
        async for doc in cursor:
            users.append(User.from_dict(doc))
        return users

    async def update(self, user_id: str, updates: dict) -> Optional[User]:
        updates = dict(updates)
        if "email" in updates:
            updates["email"] = updates["email"].lower()
        updates["updated_at"] = datetime.now(timezone.utc)

        result = await self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": updates},
            return_document=True,
        )
        if result is None:
            return None
        return User.from_dict(result)

    async def delete(self, user_id: str) -> bool:
        result = await self.collection.delete_one({"_id": user_id})
        return result.deleted_count > 0


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users: dict[str, User] = {}

    def clear(self) -> None:
        self._users.clear()

    async def create(self, user: User) -> User:
        self._users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_all(self) -> List[User]:
        return sorted(self._users.values(), key=lambda u: u.created_at, reverse=True)

    async def update(self, user_id: str, updates: dict) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None

        for key, value in updates.items():
            if key == "email":
                value = value.lower()
            if hasattr(user, key):
                setattr(user, key, value)

        user.updated_at = datetime.now(timezone.utc)
        return user

    async def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None


async def get_user_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> UserRepositoryInterface:
    """Dependency to get user repository instance."""
    return MongoUserRepository(db)
