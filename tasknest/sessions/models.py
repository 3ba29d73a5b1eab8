"""
TASKNEST API - Session Models

A session is the stored record of one issued token.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """Issued token tied to a user, with its expiry."""

    id: str
    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, token: str, user_id: str, expires_at: datetime) -> "Session":
        """Create a new session with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            created_at=_utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert session to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "token": self.token,
            "user_id": self.user_id,
            "expires_at": self.expires_at,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        """Create session from MongoDB document."""
        return cls(
            id=data["_id"],
            token=data["token"],
            user_id=data["user_id"],
            expires_at=data["expires_at"],
            created_at=data["created_at"],
        )
