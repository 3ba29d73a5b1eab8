"""
TASKNEST API - Route Guard

Middleware in front of every protected path. It extracts and verifies the
bearer token once, answers 401 on failure, and otherwise leaves an
AuthContext on request.state for the handler (see CurrentAuth).
"""

from dataclasses import dataclass
from typing import Callable, Sequence
import logging

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from tasknest.auth.tokens import TokenClaim, TokenCodec, extract_bearer_token
from tasknest.errors import AuthError
from tasknest.responses import error_response

logger = logging.getLogger(__name__)


PROTECTED_PATHS: tuple[str, ...] = (
    "/tasks",
    "/dashboard",
    "/auth/me",
    "/auth/logout",
    "/users",
    "/auth-sessions",
)

WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class AuthContext:
    """Verified identity of the current request."""

    token: str
    claim: TokenClaim

    @property
    def subject(self) -> str:
        return self.claim.subject


def is_protected_path(path: str, protected_paths: Sequence[str] = PROTECTED_PATHS) -> bool:
    """A prefix protects itself and everything below it, not its siblings."""
    path = path.rstrip("/") or "/"
    return any(path == prefix or path.startswith(prefix + "/") for prefix in protected_paths)


class AuthGuardMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests to protected paths with 401."""

    def __init__(
        self,
        app: ASGIApp,
        codec_provider: Callable[[], TokenCodec],
        protected_paths: Sequence[str] = PROTECTED_PATHS,
    ):
        super().__init__(app)
        self.codec_provider = codec_provider
        self.protected_paths = tuple(protected_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # CORS preflight carries no credentials
        if request.method == "OPTIONS" or not is_protected_path(request.url.path, self.protected_paths):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            logger.debug(f"Rejected {request.method} {request.url.path}: no bearer token")
            return error_response(status.HTTP_401_UNAUTHORIZED, "Unauthorized", WWW_AUTHENTICATE)

        try:
            claim = self.codec_provider().verify(token)
        except AuthError as exc:
            logger.debug(f"Rejected {request.method} {request.url.path}: {exc.message}")
            return error_response(status.HTTP_401_UNAUTHORIZED, "Invalid token", WWW_AUTHENTICATE)

        request.state.auth = AuthContext(token=token, claim=claim)
        return await call_next(request)
