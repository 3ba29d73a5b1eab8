"""
TASKNEST API - Session Service

Issues tokens and records them as sessions.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional
import logging

from tasknest.auth.tokens import TokenClaim, TokenCodec
from tasknest.sessions.models import Session
from tasknest.sessions.repository import SessionRepositoryInterface

logger = logging.getLogger(__name__)


class SessionService:
    """Session lifecycle on top of a repository and a token codec."""

    def __init__(
        self,
        repository: SessionRepositoryInterface,
        codec: TokenCodec,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository
        self.codec = codec
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def create(
        self,
        user_id: str,
        email: str,
        expires_at: Optional[datetime] = None,
    ) -> Session:
        """
        Sign a fresh token for the user and store it as a session.

        The token's own expiry matches expires_at (default: now + codec TTL).
        A user may hold any number of sessions at once.
        """
        now = self._clock()
        if expires_at is None:
            expires_at = now + self.codec.ttl

        token = self.codec.sign(
            TokenClaim(subject=user_id, email=email),
            expires_delta=expires_at - now,
        )
        session = Session.create(token=token, user_id=user_id, expires_at=expires_at)
        await self.repository.create(session)
        logger.info(f"Session {session.id} created for user {user_id}")
        return session

    async def find_by_token(self, token: str) -> Optional[Session]:
        return await self.repository.get_by_token(token)

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        return await self.repository.get_by_id(session_id)

    async def list_by_user(self, user_id: str) -> List[Session]:
        return await self.repository.list_by_user(user_id)

    async def delete_by_token(self, token: str) -> None:
        await self.repository.delete_by_token(token)

    async def delete_by_id(self, session_id: str) -> None:
        await self.repository.delete_by_id(session_id)
        logger.info(f"Session {session_id} deleted")
