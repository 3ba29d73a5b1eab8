from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass
class User:
    """User entity for authentication."""

    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, name: str, email: str, password_hash: str) -> "User":
        """Create a new user with generated ID."""
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        """Convert user to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create user from MongoDB document."""
        return cls(
            id=data["_id"],
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            created_at=data["created_at"],
            updated_at=data.get("updated_at", data["created_at"]),
        )
