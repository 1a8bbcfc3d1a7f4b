"""
Tests for job search, CRUD, soft delete and aggregation endpoints.
"""
from app.db.models.job import Job


def job_body(**overrides):
    body = {
        "title": "Data Engineer",
        "company": "Acme",
        "location": "Remote",
        "type": "full-time",
        "category": "Engineering",
        "description": "Pipelines all day.",
        "requirements": "SQL",
        "responsibilities": "Build pipelines",
        "experience": "2+ years",
        "education": "BSc",
        "salaryRange": "$90k - $110k",
        "skills": ["sql", "python"],
    }
    body.update(overrides)
    return body


def test_create_job_as_recruiter(client, recruiter, recruiter_headers):
    response = client.post("/api/jobs", headers=recruiter_headers, json=job_body())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["postedBy"] == recruiter.id
    assert data["isActive"] is True
    assert data["views"] == 0
    assert data["totalApplications"] == 0
    assert data["skills"] == ["sql", "python"]


def test_create_job_as_admin(client, admin, auth_headers):
    response = client.post("/api/jobs", headers=auth_headers(admin), json=job_body())
    assert response.status_code == 201


def test_create_job_forbidden_for_job_seeker(client, seeker_headers):
    response = client.post("/api/jobs", headers=seeker_headers, json=job_body())

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_create_job_requires_auth(client):
    response = client.post("/api/jobs", json=job_body())
    assert response.status_code == 401


def test_create_job_invalid_type(client, recruiter_headers):
    response = client.post("/api/jobs", headers=recruiter_headers, json=job_body(type="gig"))

    assert response.status_code == 400
    assert any(error["field"] == "type" for error in response.json()["errors"])


def test_list_jobs_filters_are_anded(client, recruiter, make_job):
    make_job(recruiter, title="Python Developer", location="Berlin", category="Engineering")
    make_job(recruiter, title="Python Trainer", location="Munich", category="Education")
    make_job(recruiter, title="Java Developer", location="Berlin", category="Engineering")

    response = client.get("/api/jobs", params={"search": "python", "location": "berlin"})

    assert response.status_code == 200
    titles = [job["title"] for job in response.json()["data"]]
    assert titles == ["Python Developer"]


def test_list_jobs_category_all_matches_everything(client, recruiter, make_job):
    make_job(recruiter, category="Engineering")
    make_job(recruiter, category="Design")

    response = client.get("/api/jobs", params={"category": "all"})

    assert response.json()["pagination"]["total"] == 2


def test_list_jobs_pagination(client, recruiter, make_job):
    for i in range(5):
        make_job(recruiter, title=f"Job {i}")

    response = client.get("/api/jobs", params={"page": 2, "limit": 2})

    pagination = response.json()["pagination"]
    assert pagination == {"current": 2, "pages": 3, "total": 5, "limit": 2}
    assert len(response.json()["data"]) == 2


def test_list_jobs_sorted_newest_first(client, recruiter, make_job):
    first = make_job(recruiter, title="Older")
    second = make_job(recruiter, title="Newer")

    response = client.get("/api/jobs")

    ids = [job["id"] for job in response.json()["data"]]
    assert ids.index(second.id) < ids.index(first.id)


def test_search_requires_query(client):
    response = client.get("/api/jobs/search")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_search_matches_company(client, recruiter, make_job):
    make_job(recruiter, company="Initech", title="Analyst")

    response = client.get("/api/jobs/search", params={"q": "initech"})

    assert response.json()["pagination"]["total"] == 1


def test_get_job_increments_views(client, sample_job, db_session):
    assert client.get(f"/api/jobs/{sample_job.id}").status_code == 200
    response = client.get(f"/api/jobs/{sample_job.id}")

    assert response.json()["data"]["views"] == 1
    db_session.expire_all()
    assert db_session.get(Job, sample_job.id).views == 2


def test_get_missing_job(client):
    response = client.get("/api/jobs/9999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Job not found", "code": "not_found"}


def test_update_job_by_owner(client, sample_job, recruiter_headers):
    response = client.put(f"/api/jobs/{sample_job.id}", headers=recruiter_headers, json={"title": "Staff Engineer"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Staff Engineer"
    assert data["location"] == "Berlin"


def test_update_job_by_other_recruiter(client, sample_job, other_recruiter, auth_headers):
    response = client.put(
        f"/api/jobs/{sample_job.id}",
        headers=auth_headers(other_recruiter),
        json={"title": "Hijacked"},
    )
    assert response.status_code == 403


def test_delete_job_is_soft(client, sample_job, recruiter_headers):
    response = client.delete(f"/api/jobs/{sample_job.id}", headers=recruiter_headers)
    assert response.status_code == 200

    listing = client.get("/api/jobs").json()
    assert listing["pagination"]["total"] == 0

    detail = client.get(f"/api/jobs/{sample_job.id}")
    assert detail.status_code == 200
    assert detail.json()["data"]["isActive"] is False


def test_delete_job_by_other_recruiter(client, sample_job, other_recruiter, auth_headers):
    response = client.delete(f"/api/jobs/{sample_job.id}", headers=auth_headers(other_recruiter))
    assert response.status_code == 403


def test_my_jobs_includes_inactive(client, recruiter, other_recruiter, make_job, recruiter_headers):
    make_job(recruiter, is_active=False)
    make_job(recruiter)
    make_job(other_recruiter)

    response = client.get("/api/jobs/mine", headers=recruiter_headers)

    assert response.json()["pagination"]["total"] == 2


def test_categories_count_active_jobs(client, recruiter, make_job):
    make_job(recruiter, category="Engineering")
    make_job(recruiter, category="Engineering")
    make_job(recruiter, category="Design")
    make_job(recruiter, category="Design", is_active=False)

    response = client.get("/api/jobs/categories")

    assert response.json()["data"] == [
        {"name": "Engineering", "count": 2},
        {"name": "Design", "count": 1},
    ]


def test_count_active_jobs(client, recruiter, make_job):
    make_job(recruiter)
    make_job(recruiter, is_active=False)

    assert client.get("/api/jobs/count").json()["count"] == 1


def test_companies_aggregation(client, recruiter, other_recruiter, make_job):
    make_job(recruiter, company="Acme")
    make_job(recruiter, company="Acme")
    make_job(recruiter, company="Acme", is_active=False)
    make_job(other_recruiter, company="Globex")

    response = client.get("/api/jobs/companies")

    data = response.json()
    assert data["total"] == 2
    assert data["companies"][0] == {"id": 1, "name": "Acme", "jobs": 3, "logo": "AC"}
    assert data["companies"][1]["name"] == "Globex"


def test_jobs_by_company(client, recruiter, other_recruiter, make_job):
    make_job(recruiter, company="Acme")
    make_job(other_recruiter, company="Globex")

    response = client.get("/api/jobs/company/acme")

    assert [job["company"] for job in response.json()["data"]] == ["Acme"]


def test_public_jobs_treats_all_jobs_as_no_search(client, recruiter, make_job):
    make_job(recruiter)
    make_job(recruiter, title="Designer")

    response = client.get("/api/jobs/public", params={"search": "All Jobs"})

    assert response.json()["pagination"]["total"] == 2


def test_update_job_rejects_null_for_required_fields(client, sample_job, recruiter_headers):
    for body in ({"title": None}, {"skills": None}, {"isActive": None}):
        response = client.put(f"/api/jobs/{sample_job.id}", headers=recruiter_headers, json=body)
        assert response.status_code == 400
        assert response.json()["success"] is False

    # The stored row is untouched and still renders everywhere
    assert client.get("/api/jobs").status_code == 200
    detail = client.get(f"/api/jobs/{sample_job.id}").json()["data"]
    assert detail["title"] == "Backend Engineer"
    assert detail["skills"] == []


def test_update_job_allows_clearing_optional_fields(client, recruiter, make_job, recruiter_headers):
    job = make_job(recruiter, salary_range="$100k")

    response = client.put(f"/api/jobs/{job.id}", headers=recruiter_headers, json={"salaryRange": None})

    assert response.status_code == 200
    assert response.json()["data"]["salaryRange"] is None


def test_pages_cover_every_job_exactly_once(client, recruiter, make_job):
    for i in range(7):
        make_job(recruiter, title=f"Job {i}")

    seen = []
    first = client.get("/api/jobs", params={"page": 1, "limit": 3}).json()
    total, pages = first["pagination"]["total"], first["pagination"]["pages"]
    for page in range(1, pages + 1):
        data = client.get("/api/jobs", params={"page": page, "limit": 3}).json()["data"]
        assert len(data) <= 3
        seen.extend(job["id"] for job in data)

    assert pages == 3
    assert len(seen) == total == 7
    assert len(set(seen)) == total
