from datetime import datetime

from pydantic import BaseModel, Field

from tasknest.sessions.models import Session


class SessionResponse(BaseModel):
    """Session record as returned by the introspection endpoints."""

    id: str = Field(description="Session ID")
    token: str = Field(description="Bearer token issued for this session")
    user_id: str = Field(description="Owner user ID")
    expires_at: datetime = Field(description="Expiry timestamp")
    created_at: datetime = Field(description="Creation timestamp")

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            token=session.token,
            user_id=session.user_id,
            expires_at=session.expires_at,
            created_at=session.created_at,
        )
