"""
Job endpoints.

Public search and browsing, plus recruiter-owned create/update/delete.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db
from app.core.errors import ValidationError
from app.core.gating import recruiter_required
from app.db.models.user import User
from app.schemas.common import MessageResponse, Pagination
from app.schemas.job import (
    CategoryListResponse,
    CompanyListResponse,
    JobCreate,
    JobDetailResponse,
    JobListResponse,
    JobResponse,
    JobUpdate,
    JOB_TYPE_PATTERN,
)
from app.services import job_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


def job_page(jobs, page: int, limit: int, total: int) -> JobListResponse:
    return JobListResponse(
        data=[JobResponse.model_validate(job) for job in jobs],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("", response_model=JobListResponse)
def list_jobs(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    category: Optional[str] = Query(None, description="Category (partial match, 'all' for any)"),
    location: Optional[str] = Query(None, description="Location (partial match)"),
    type: Optional[str] = Query(None, pattern=JOB_TYPE_PATTERN, description="Employment type"),
    company: Optional[str] = Query(None, description="Company (partial match)"),
    search: Optional[str] = Query(None, description="Search in title, description and company"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    """
    List active jobs.

    Filters are ANDed together. Sorted newest first unless sortBy/sortOrder say otherwise.
    """
    jobs, total = job_service.list_jobs(
        db,
        page=page,
        limit=limit,
        category=category,
        location=location,
        job_type=type,
        company=company,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    logger.debug(f"Jobs listed: total={total}, page={page}")
    return job_page(jobs, page, limit, total)


@router.get("/search", response_model=JobListResponse)
def search_jobs(
    q: Optional[str] = Query(None, description="Search query"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    type: Optional[str] = Query(None, pattern=JOB_TYPE_PATTERN),
    db: Session = Depends(get_db),
):
    if not q or not q.strip():
        raise ValidationError("Search query is required", errors=[{"field": "q", "message": "Search query is required"}])

    jobs, total = job_service.list_jobs(
        db, page=page, limit=limit, category=category, location=location, job_type=type, search=q,
    )
    return job_page(jobs, page, limit, total)


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)):
    return CategoryListResponse(data=job_service.categories_with_counts(db))


@router.get("/count")
def count_jobs(db: Session = Depends(get_db)):
    return {"success": True, "count": job_service.count_active(db)}


@router.get("/companies", response_model=CompanyListResponse)
def featured_companies(
    limit: int = Query(job_service.DEFAULT_COMPANY_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    companies = job_service.aggregate_by_company(db, limit)
    return CompanyListResponse(companies=companies, total=len(companies))


@router.get("/public", response_model=JobListResponse)
def public_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = Query(None),
    company: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Mobile listing; the client sends 'all jobs' to mean no search."""
    if search and search.strip().lower() == "all jobs":
        search = None
    jobs, total = job_service.list_jobs(
        db, page=page, limit=limit, category=category, company=company, search=search,
    )
    return job_page(jobs, page, limit, total)


@router.get("/mine", response_model=JobListResponse)
def my_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs_for_owner(db, user, page, limit)
    return job_page(jobs, page, limit, total)


@router.get("/company/{company_name}", response_model=JobListResponse)
def jobs_by_company(
    company_name: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs(db, page=page, limit=limit, company=company_name)
    return job_page(jobs, page, limit, total)


@router.get("/category/{category}", response_model=JobListResponse)
def jobs_by_category(
    category: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs(db, page=page, limit=limit, category=category)
    return job_page(jobs, page, limit, total)


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Get a job by ID, active or not.

    Each read bumps the job's view counter.
    """
    job = job_service.get_job(db, job_id)
    data = JobResponse.model_validate(job)
    try:
        job_service.record_view(db, job_id)
    except Exception:
        # A lost view must not fail the read
        db.rollback()
        logger.error(f"Failed to record view: job_id={job_id}", exc_info=True)
    return JobDetailResponse(data=data)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobDetailResponse)
def create_job(
    job_data: JobCreate,
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    job = job_service.create_job(db, job_data.model_dump(), user)
    return JobDetailResponse(message="Job posted successfully", data=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=JobDetailResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    job = job_service.update_job(db, job_id, job_data.model_dump(exclude_unset=True), user)
    return JobDetailResponse(message="Job updated successfully", data=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    job_service.soft_delete_job(db, job_id, user)
    return MessageResponse(message="Job deleted successfully")
