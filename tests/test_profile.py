"""
Tests for profile data, profile-view tracking and view statistics.
"""
from datetime import datetime, timedelta

from app.db.models.user import ProfileView, User
from app.services import auth_service


def test_get_profile(client, job_seeker, seeker_headers):
    response = client.get("/api/profile", headers=seeker_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["firstName"] == "Sam"
    assert data["profile"] == {}


def test_update_profile_merges_blob(client, job_seeker, seeker_headers):
    response = client.put(
        "/api/profile",
        headers=seeker_headers,
        json={
            "firstName": "Samuel",
            "bio": "Backend developer",
            "skills": ["python", "sql"],
            "profile": {"website": "https://sam.dev"},
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["firstName"] == "Samuel"
    assert data["profile"]["bio"] == "Backend developer"
    assert data["profile"]["skills"] == ["python", "sql"]
    assert data["profile"]["website"] == "https://sam.dev"

    # A later partial update keeps earlier blob keys
    response = client.put("/api/profile", headers=seeker_headers, json={"location": "Berlin"})
    profile = response.json()["data"]["profile"]
    assert profile["location"] == "Berlin"
    assert profile["bio"] == "Backend developer"


def test_update_profile_resume_data_stamps_time(client, seeker_headers):
    response = client.put(
        "/api/auth/profile",
        headers=seeker_headers,
        json={"resumeData": {"summary": "Hello"}, "resumeTemplate": "modern"},
    )

    profile = response.json()["data"]["profile"]
    assert profile["resumeData"] == {"summary": "Hello"}
    assert profile["resumeTemplate"] == "modern"
    assert "resumeUpdatedAt" in profile


def test_update_profile_rejects_short_phone(client, seeker_headers):
    response = client.put("/api/profile", headers=seeker_headers, json={"phone": "123"})
    assert response.status_code == 400


def test_update_profile_email_taken(client, job_seeker, recruiter, seeker_headers):
    response = client.put("/api/profile", headers=seeker_headers, json={"email": "recruiter@example.com"})
    assert response.status_code == 409


def test_track_profile_view_once_per_day(client, job_seeker, recruiter, recruiter_headers, db_session):
    for _ in range(2):
        response = client.post(f"/api/profile/{job_seeker.id}/view", headers=recruiter_headers)
        assert response.status_code == 200

    views = db_session.query(ProfileView).filter(ProfileView.viewed_user_id == job_seeker.id).count()
    assert views == 1


def test_self_view_not_tracked(client, job_seeker, seeker_headers, db_session):
    response = client.post("/api/auth/profile/view", headers=seeker_headers, json={"viewedUserId": job_seeker.id})

    assert response.status_code == 200
    assert db_session.query(ProfileView).count() == 0


def test_view_of_unknown_user(client, recruiter_headers):
    response = client.post("/api/profile/9999/view", headers=recruiter_headers)
    assert response.status_code == 404


def test_profile_view_stats(db_session, job_seeker, recruiter, other_recruiter):
    now = datetime.utcnow()
    db_session.add_all([
        ProfileView(viewed_user_id=job_seeker.id, viewer_id=recruiter.id, viewed_at=now - timedelta(days=1)),
        ProfileView(viewed_user_id=job_seeker.id, viewer_id=other_recruiter.id, viewed_at=now - timedelta(days=2)),
        ProfileView(viewed_user_id=job_seeker.id, viewer_id=recruiter.id, viewed_at=now - timedelta(days=40)),
    ])
    db_session.commit()

    user = db_session.get(User, job_seeker.id)
    stats = auth_service.profile_view_stats(db_session, user, now)

    assert stats == {
        "total_views": 3,
        "last_month_views": 2,
        "previous_month_views": 1,
        "percentage_change": 100,
    }


def test_profile_view_stats_endpoint(client, job_seeker, seeker_headers):
    response = client.get("/api/profile/view-stats", headers=seeker_headers)

    assert response.status_code == 200
    assert response.json()["stats"]["totalViews"] == 0
    assert response.json()["stats"]["percentageChange"] == 0


def test_percentage_change():
    assert auth_service.percentage_change(3, 2) == 50
    assert auth_service.percentage_change(1, 0) == 100
    assert auth_service.percentage_change(0, 0) == 0
    assert auth_service.percentage_change(0, 4) == -100
