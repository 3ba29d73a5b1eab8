from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from tasknest.config import settings
from tasknest.auth.guard import AuthContext
from tasknest.auth.service import AuthService
from tasknest.auth.tokens import TokenCodec
from tasknest.errors import AuthError
from tasknest.sessions.repository import SessionRepositoryInterface, get_session_repository
from tasknest.sessions.service import SessionService
from tasknest.users.repository import UserRepositoryInterface, get_user_repository


@lru_cache
def get_token_codec() -> TokenCodec:
    """Process-wide token codec built from settings on first use."""
    return TokenCodec(
        secret=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def get_session_service(
    repository: Annotated[SessionRepositoryInterface, Depends(get_session_repository)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> SessionService:
    """Dependency to get SessionService instance."""
    return SessionService(repository, codec)


def get_auth_service(
    user_repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    session_service: Annotated[SessionService, Depends(get_session_service)],
) -> AuthService:
    """Dependency to get AuthService instance with its repositories."""
    return AuthService(user_repository, session_service)


async def get_auth_context(
    request: Request,
    session_service: Annotated[SessionService, Depends(get_session_service)],
) -> AuthContext:
    """
    Identity verified by AuthGuardMiddleware for this request.

    Routes using this dependency must sit under one of the guard's protected
    paths; otherwise there is no context and the request is rejected.
    With REQUIRE_ACTIVE_SESSION the token's session row must also still exist.
    """
    context = getattr(request.state, "auth", None)
    if context is None:
        raise AuthError()

    if settings.REQUIRE_ACTIVE_SESSION:
        if await session_service.find_by_token(context.token) is None:
            raise AuthError("Session has been revoked")

    return context


# Type alias for cleaner dependency injection
CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
