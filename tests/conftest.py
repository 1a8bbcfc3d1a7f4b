"""
Shared fixtures: in-memory SQLite database, API client and seeded users.
"""
import os

# Must be set before app modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.models import Job, User
from app.core.auth_dependency import get_db
from app.core.security import hash_password, create_access_token


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

DEFAULT_PASSWORD = "testpass123"


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the database dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Factory for persisted users."""
    def _make_user(email, role="job-seeker", company=None, first_name="Test", last_name="User", password=DEFAULT_PASSWORD):
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password) if password else None,
            role=role,
            company=company,
            profile={},
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def job_seeker(make_user):
    return make_user("seeker@example.com", first_name="Sam", last_name="Seeker")


@pytest.fixture
def recruiter(make_user):
    return make_user("recruiter@example.com", role="recruiter", company="Acme", first_name="Rita", last_name="Recruiter")


@pytest.fixture
def other_recruiter(make_user):
    return make_user("other@example.com", role="recruiter", company="Globex", first_name="Otto", last_name="Other")


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role="admin", first_name="Ada", last_name="Admin")


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def auth_headers():
    """Bearer header builder for a persisted user."""
    return bearer


@pytest.fixture
def seeker_headers(job_seeker):
    return bearer(job_seeker)


@pytest.fixture
def recruiter_headers(recruiter):
    return bearer(recruiter)


@pytest.fixture
def make_job(db_session):
    """Factory for persisted jobs with sensible defaults."""
    def _make_job(owner, **overrides):
        fields = {
            "title": "Backend Engineer",
            "company": owner.company or "Acme",
            "location": "Berlin",
            "type": "full-time",
            "category": "Engineering",
            "description": "Build and run our APIs.",
            "requirements": "Python",
            "responsibilities": "Ship services",
            "experience": "3+ years",
            "education": "BSc",
            "skills": [],
            "benefits": [],
            "tags": [],
        }
        fields.update(overrides)
        job = Job(posted_by=owner.id, **fields)
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make_job


@pytest.fixture
def sample_job(make_job, recruiter):
    return make_job(recruiter)


@pytest.fixture
def application_payload():
    """Builder for a valid application form body."""
    def _payload(job_id, **overrides):
        payload = {
            "jobId": job_id,
            "fullName": "Sam Seeker",
            "email": "sam@example.com",
            "phone": "5551234567",
            "currentLocation": "Berlin",
            "experience": "3 years",
            "education": "BSc Computer Science",
            "coverLetter": "I would love to join.",
        }
        payload.update(overrides)
        return payload

    return _payload
