"""
Simple tests for role and ownership gating logic.
"""
import pytest

from app.core.errors import Forbidden
from app.core.gating import is_admin, is_recruiter, require_ownership, require_role, RECRUITER_ROLES
from app.db.models.user import User


def make(role, user_id=1):
    return User(id=user_id, first_name="T", last_name="U", email=f"{role}@example.com", role=role)


def test_recruiter_roles():
    assert is_recruiter(make("recruiter"))
    assert is_recruiter(make("admin"))
    assert not is_recruiter(make("job-seeker"))


def test_admin_role():
    assert is_admin(make("admin"))
    assert not is_admin(make("recruiter"))


def test_require_role_passes_through_user():
    user = make("recruiter")
    assert require_role(user, RECRUITER_ROLES) is user


def test_require_role_rejects():
    with pytest.raises(Forbidden) as exc:
        require_role(make("job-seeker"), RECRUITER_ROLES, "Recruiters only")
    assert exc.value.message == "Recruiters only"
    assert exc.value.status_code == 403


def test_require_ownership():
    owner = make("recruiter", user_id=7)
    assert require_ownership(owner, 7) is owner

    with pytest.raises(Forbidden):
        require_ownership(owner, 8)

    with pytest.raises(Forbidden):
        require_ownership(owner, None)


def test_admin_is_not_exempt_from_ownership():
    with pytest.raises(Forbidden):
        require_ownership(make("admin", user_id=1), 2)
