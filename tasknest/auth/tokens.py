"""
TASKNEST API - Token Codec

Signs and verifies the bearer tokens handed out at login/registration, and
pulls them out of Authorization headers.

Tokens are HS256 JWTs (python-jose) carrying the user id as `sub`, the
email, `iat`, `exp` and a random `jti`. Verification is a pure function of
the token, the secret and the clock: it never looks at the session store.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi.security.utils import get_authorization_scheme_param
from jose import ExpiredSignatureError, JWTError, jwt

from tasknest.errors import AuthError


DEFAULT_TOKEN_TTL = timedelta(minutes=15)


class InvalidTokenError(AuthError):
    default_message = "Invalid token"


class ExpiredTokenError(AuthError):
    default_message = "Token expired"


@dataclass(frozen=True)
class TokenClaim:
    """Identity asserted by a token."""

    subject: str
    email: str


class TokenCodec:
    """JWT signer/verifier bound to one secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def sign(self, claim: TokenClaim, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token for the claim, expiring after the TTL."""
        if expires_delta is None:
            expires_delta = self.ttl

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": claim.subject,
            "email": claim.email,
            "iat": now,
            "exp": now + expires_delta,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaim:
        """
        Decode and validate a token.

        Raises:
            ExpiredTokenError: the embedded expiry has passed
            InvalidTokenError: bad signature, malformed token or missing claims
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except JWTError as exc:
            raise InvalidTokenError() from exc

        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            raise InvalidTokenError()
        return TokenClaim(subject=subject, email=email)


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """
    Return the token from an `Authorization: Bearer <token>` header value.

    The scheme is matched case-insensitively. Returns None when the header is
    absent, uses another scheme or has an empty token segment.
    """
    if not header_value:
        return None
    scheme, token = get_authorization_scheme_param(header_value)
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token
