"""
Tests for registration, login, token verification and the current user.
"""
from datetime import timedelta

from app.core.security import create_access_token
from app.db.models.user import User


def register_body(**overrides):
    body = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "Jane@Example.com",
        "password": "testpass123",
    }
    body.update(overrides)
    return body


def test_register_job_seeker(client, db_session):
    """Registration stores a lower-cased email and returns a token."""
    response = client.post("/api/auth/register", json=register_body())

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["role"] == "job-seeker"
    assert "passwordHash" not in data["user"]

    user = db_session.query(User).filter(User.email == "jane@example.com").first()
    assert user is not None
    assert user.password_hash != "testpass123"


def test_register_recruiter_requires_company(client):
    response = client.post("/api/auth/register", json=register_body(role="recruiter"))

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert any(error["field"] == "company" for error in data["errors"])


def test_register_recruiter_with_company(client):
    response = client.post("/api/auth/register", json=register_body(role="recruiter", company="Acme"))

    assert response.status_code == 201
    assert response.json()["user"]["company"] == "Acme"


def test_register_cannot_self_assign_admin(client):
    response = client.post("/api/auth/register", json=register_body(role="admin"))
    assert response.status_code == 400


def test_register_short_password(client):
    response = client.post("/api/auth/register", json=register_body(password="short"))

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_register_duplicate_email_is_case_insensitive(client):
    assert client.post("/api/auth/register", json=register_body()).status_code == 201

    response = client.post("/api/auth/register", json=register_body(email="JANE@example.COM"))

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_login_success_updates_last_login(client, job_seeker, db_session):
    response = client.post("/api/auth/login", json={"email": "SEEKER@example.com", "password": "testpass123"})

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["id"] == job_seeker.id

    db_session.expire_all()
    assert db_session.get(User, job_seeker.id).last_login is not None


def test_login_wrong_password(client, job_seeker):
    response = client.post("/api/auth/login", json={"email": "seeker@example.com", "password": "wrongpass"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "whatever1"})
    assert response.status_code == 401


def test_login_passwordless_account(client, make_user):
    make_user("social@example.com", password=None)

    response = client.post("/api/auth/login", json={"email": "social@example.com", "password": "anything1"})

    assert response.status_code == 401
    assert "sign-in" in response.json()["message"]


def test_me_returns_current_user(client, job_seeker, seeker_headers):
    response = client.get("/api/auth/me", headers=seeker_headers)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "seeker@example.com"


def test_missing_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "token_missing"


def test_malformed_header(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Token abc"})

    assert response.status_code == 401
    assert response.json()["code"] == "token_invalid"


def test_invalid_signature(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.json()["code"] == "token_invalid"


def test_expired_token(client, job_seeker):
    token = create_access_token(job_seeker.id, expires_delta=timedelta(seconds=-10))

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "token_expired"


def test_token_for_deleted_user(client, job_seeker, db_session):
    headers = {"Authorization": f"Bearer {create_access_token(job_seeker.id)}"}
    db_session.delete(db_session.get(User, job_seeker.id))
    db_session.commit()

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["code"] == "user_not_found"


def test_verify_token_valid(client, job_seeker, seeker_headers):
    response = client.get("/api/auth/verify-token", headers=seeker_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["user"]["id"] == job_seeker.id


def test_verify_token_reports_invalid_without_401(client):
    response = client.get("/api/auth/verify-token", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 200
    assert response.json()["valid"] is False


def test_verify_token_without_header(client):
    response = client.get("/api/auth/verify-token")

    assert response.status_code == 200
    assert response.json() == {"valid": False, "message": "No token provided"}
