"""
TASKNEST API - Password Hashing

bcrypt with the cost factor from BCRYPT_ROUNDS. bcrypt only considers the
first 72 bytes of its input, so hashing and verification truncate there.
"""

import bcrypt

from tasknest.config import settings


BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. A malformed hash never matches."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False


# Checked for unknown emails: one bcrypt round per login either way.
DUMMY_HASH: str = hash_password("tasknest-timing-equalizer")
