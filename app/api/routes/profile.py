"""
Profile endpoints scoped to the caller: profile data, applied jobs and
dashboard activity views.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user_obj
from app.db.models.application import ApplicationStatus
from app.db.models.user import User
from app.schemas.application import (
    ActivityEntry,
    ActivityListResponse,
    AppliedJobEntry,
    AppliedJobListResponse,
)
from app.schemas.auth import (
    ProfileData,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileViewStatsResponse,
)
from app.schemas.common import MessageResponse, Pagination
from app.services import application_service, auth_service

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def applied_jobs_page(db: Session, user: User, page: int, limit: int) -> AppliedJobListResponse:
    """Shape a page of the user's applied-job references."""
    entries, total = application_service.list_applied_jobs(db, user, page, limit)
    jobs = [
        AppliedJobEntry(
            id=entry.id,
            application_id=entry.application_id,
            job_id=entry.job_id,
            title=entry.job.title,
            company=entry.job.company,
            location=entry.job.location,
            type=entry.job.type,
            category=entry.job.category,
            salary=entry.job.salary_range,
            status=entry.status,
            applied_at=entry.applied_at,
            job_posted_at=entry.job.created_at,
        )
        for entry in entries
    ]
    return AppliedJobListResponse(jobs=jobs, pagination=Pagination.build(page, limit, total))


@router.get("", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user_obj)):
    return ProfileResponse(data=ProfileData.model_validate(user))


@router.put("", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    user = auth_service.update_profile(db, user, payload.model_dump(exclude_unset=True))
    return ProfileResponse(message="Profile updated successfully", data=ProfileData.model_validate(user))


@router.get("/applied-jobs", response_model=AppliedJobListResponse)
def get_applied_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    return applied_jobs_page(db, user, page, limit)


@router.get("/applied-jobs/stats")
def get_applied_jobs_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    counts = application_service.status_counts(db, user.id)
    stats = {"total": sum(counts.values())}
    for status in ApplicationStatus:
        stats[status.value] = counts.get(status.value, 0)
    return {"success": True, "stats": stats}


@router.get("/interview-stats")
def get_interview_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"success": True, "stats": application_service.interview_statistics(db, user)}


@router.get("/view-stats", response_model=ProfileViewStatsResponse)
def get_view_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return ProfileViewStatsResponse(stats=auth_service.profile_view_stats(db, user))


@router.post("/{viewed_user_id}/view", response_model=MessageResponse)
def track_profile_view(
    viewed_user_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    if viewed_user_id == user.id:
        return MessageResponse(message="Self-view not tracked")
    auth_service.track_profile_view(db, user, viewed_user_id)
    return MessageResponse(message="Profile view tracked successfully")


@router.get("/recent-activities", response_model=ActivityListResponse)
def get_recent_activities(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    activities = application_service.recent_activities(db, user, limit)
    return ActivityListResponse(activities=[ActivityEntry(**activity) for activity in activities])
