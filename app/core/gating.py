"""
Role and ownership gating.

Pure predicate checks layered on the authenticated principal. The API layer
runs them in sequence before any mutation.
"""
import logging
from typing import Iterable

from fastapi import Depends

from app.core.auth_dependency import get_current_user_obj
from app.core.errors import Forbidden
from app.db.models.user import User, UserRole

logger = logging.getLogger(__name__)

RECRUITER_ROLES = {UserRole.RECRUITER.value, UserRole.ADMIN.value}
ADMIN_ROLES = {UserRole.ADMIN.value}


def has_role(user: User, allowed: Iterable[str]) -> bool:
    """Check if the user's role is one of the allowed roles."""
    return user.role in set(allowed)


def is_recruiter(user: User) -> bool:
    """Recruiters and admins may post jobs and manage applications."""
    return has_role(user, RECRUITER_ROLES)


def is_admin(user: User) -> bool:
    return has_role(user, ADMIN_ROLES)


def require_role(user: User, allowed: Iterable[str], message: str = None) -> User:
    """
    Fail unless the principal holds one of the allowed roles.

    Raises:
        Forbidden: role not allowed
    """
    allowed = set(allowed)
    if user.role not in allowed:
        logger.warning(f"Role check failed: user_id={user.id}, role={user.role}, allowed={sorted(allowed)}")
        raise Forbidden(message or f"Access denied. Requires role: {', '.join(sorted(allowed))}")
    return user


def require_ownership(user: User, owner_id: int, message: str = None) -> User:
    """
    Fail unless the principal is the owner of the resource.

    Raises:
        Forbidden: principal is not the owner
    """
    if owner_id is None or user.id != owner_id:
        logger.warning(f"Ownership check failed: user_id={user.id}, owner_id={owner_id}")
        raise Forbidden(message or "Not authorized to modify this resource")
    return user


def role_required(*roles: str, message: str = None):
    """
    Dependency factory: authenticate, then enforce one of the given roles.

    Returns:
        The authenticated User
    """
    def role_checker(user: User = Depends(get_current_user_obj)) -> User:
        return require_role(user, roles, message)

    return role_checker


recruiter_required = role_required(*sorted(RECRUITER_ROLES), message="Access denied. Recruiter role required.")
admin_required = role_required(*ADMIN_ROLES, message="Access denied. Admin role required.")
