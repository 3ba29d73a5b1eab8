"""
TASKNEST API - Session Repository

Persistence for session records. Deletes are idempotent: removing a
session that does not exist is not an error.
"""

from abc import ABC, abstractmethod
from typing import Annotated, List, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from tasknest.database import get_database
from tasknest.sessions.models import Session


class SessionRepositoryInterface(ABC):
    """Abstract interface for session repository."""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Session]:
        pass

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[Session]:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Session]:
        """List a user's sessions, newest first."""
        pass

    @abstractmethod
    async def delete_by_token(self, token: str) -> None:
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: str) -> None:
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: str) -> int:
        """Delete every session of a user; returns how many were removed."""
        pass


class MongoSessionRepository(SessionRepositoryInterface):
    """MongoDB implementation of the session repository."""

    COLLECTION_NAME = "sessions"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("token", ASCENDING)], unique=True)
        await self.collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    async def create(self, session: Session) -> Session:
        await self.collection.insert_one(session.to_dict())
        return session

    async def get_by_token(self, token: str) -> Optional[Session]:
        doc = await self.collection.find_one({"token": token})
        if doc is None:
            return None
        return Session.from_dict(doc)

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        doc = await self.collection.find_one({"_id": session_id})
        if doc is None:
            return None
        return Session.from_dict(doc)

    async def list_by_user(self, user_id: str) -> List[Session]:
        cursor = self.collection.find({"user_id": user_id}).sort("created_at", -1)
        sessions: List[Session] = []
        async for doc in cursor:
            sessions.append(Session.from_dict(doc))
        return sessions

    async def delete_by_token(self, token: str) -> None:
        await self.collection.delete_many({"token": token})

    async def delete_by_id(self, session_id: str) -> None:
        await self.collection.delete_one({"_id": session_id})

    async def delete_by_user(self, user_id: str) -> int:
        result = await self.collection.delete_many({"user_id": user_id})
        return result.deleted_count


class InMemorySessionRepository(SessionRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def clear(self) -> None:
        self._sessions.clear()

    async def create(self, session: Session) -> Session:
        self._sessions[session.id] = session
        return session

    async def get_by_token(self, token: str) -> Optional[Session]:
        for session in self._sessions.values():
            if session.token == token:
                return session
        return None

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    async def list_by_user(self, user_id: str) -> List[Session]:
        results = [s for s in self._sessions.values() if s.user_id == user_id]
        results.sort(key=lambda s: s.created_at, reverse=True)
        return results

    async def delete_by_token(self, token: str) -> None:
        for session_id in [s.id for s in self._sessions.values() if s.token == token]:
            del self._sessions[session_id]

    async def delete_by_id(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def delete_by_user(self, user_id: str) -> int:
        doomed = [s.id for s in self._sessions.values() if s.user_id == user_id]
        for session_id in doomed:
            del self._sessions[session_id]
        return len(doomed)


async def get_session_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> SessionRepositoryInterface:
    """Dependency to get session repository instance."""
    return MongoSessionRepository(db)
