"""
TASKNEST API - Ownership Checks

Resource handlers load a record first (404 when absent) and then call
ensure_owner. Self-only user routes call ensure_self before touching the
store at all.
"""

from tasknest.errors import ForbiddenError


def ensure_owner(owner_id: str, subject: str) -> None:
    """Raise ForbiddenError unless the resource belongs to the subject."""
    if owner_id != subject:
        raise ForbiddenError()


def ensure_self(target_user_id: str, subject: str) -> None:
    """Raise ForbiddenError unless the path id is the caller's own id."""
    if target_user_id != subject:
        raise ForbiddenError()
