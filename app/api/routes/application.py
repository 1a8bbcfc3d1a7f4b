from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user_obj
from app.core.gating import recruiter_required
from app.db.models.user import User
from app.schemas.application import (
    ActivityEntry,
    ActivityListResponse,
    ApplicationCreate,
    ApplicationDetailResponse,
    ApplicationLimits,
    ApplicationLimitsResponse,
    ApplicationListResponse,
    ApplicationResponse,
    PublicApplicationCreate,
    StatusUpdateRequest,
    STATUS_PATTERN,
)
from app.schemas.common import Pagination
from app.services import application_service

router = APIRouter(prefix="/api/applications", tags=["Applications"])


def application_page(applications, page: int, limit: int, total: int) -> ApplicationListResponse:
    return ApplicationListResponse(
        data=[ApplicationResponse.model_validate(app) for app in applications],
        pagination=Pagination.build(page, limit, total),
    )


# ✅ SUBMIT (ANONYMOUS)
@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationDetailResponse)
def submit_public_application(payload: PublicApplicationCreate, db: Session = Depends(get_db)):
    form = payload.model_dump(exclude={"job_id"})
    application = application_service.submit_application(db, payload.job_id, form)
    return ApplicationDetailResponse(
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application),
    )


# ✅ SUBMIT (SIGNED IN)
@router.post("/apply", status_code=status.HTTP_201_CREATED, response_model=ApplicationDetailResponse)
def submit_application(
    payload: ApplicationCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    form = payload.model_dump(exclude={"job_id"})
    application = application_service.submit_application(db, payload.job_id, form, applicant=user)
    return ApplicationDetailResponse(
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application),
    )


# ✅ CALLER'S APPLICATIONS
@router.get("/my-applications", response_model=ApplicationListResponse)
def my_applications(
    status_filter: Optional[str] = Query(None, alias="status", pattern=STATUS_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    applications, total = application_service.list_for_applicant(db, user, status_filter, page, limit)
    return application_page(applications, page, limit, total)


# ✅ DASHBOARD STATS
@router.get("/stats")
def application_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"success": True, "stats": application_service.application_statistics(db, user)}


@router.get("/interview-stats")
def interview_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"success": True, "stats": application_service.interview_statistics(db, user)}


@router.get("/offers-stats")
def offers_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return {"success": True, "stats": application_service.offer_statistics(db, user)}


@router.get("/limits", response_model=ApplicationLimitsResponse)
def application_limits(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return ApplicationLimitsResponse(data=ApplicationLimits(**application_service.application_limits(db, user)))


@router.get("/recent-activities", response_model=ActivityListResponse)
def recent_activities(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    activities = application_service.recent_activities(db, user, limit)
    return ActivityListResponse(activities=[ActivityEntry(**activity) for activity in activities])


# ✅ RECRUITER: APPLICATIONS FOR A JOB
@router.get("/job/{job_id}", response_model=ApplicationListResponse)
def applications_for_job(
    job_id: int,
    status_filter: Optional[str] = Query(None, alias="status", pattern=STATUS_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    applications, total = application_service.list_for_job(db, job_id, user, status_filter, page, limit)
    return application_page(applications, page, limit, total)


# ✅ SINGLE APPLICATION (applicant or job poster)
@router.get("/{application_id}", response_model=ApplicationDetailResponse)
def get_application(
    application_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    application = application_service.get_application_for_viewer(db, application_id, user)
    return ApplicationDetailResponse(data=ApplicationResponse.model_validate(application))


# ✅ RECRUITER: STATUS TRANSITION
@router.patch("/{application_id}/status", response_model=ApplicationDetailResponse)
def update_application_status(
    application_id: int,
    payload: StatusUpdateRequest,
    user: User = Depends(recruiter_required),
    db: Session = Depends(get_db),
):
    application = application_service.transition_status(
        db,
        application_id,
        payload.status,
        recruiter=user,
        note=payload.notes,
        interview=payload.interview.model_dump() if payload.interview else None,
        rejection_reason=payload.rejection_reason,
        offer_details=payload.offer_details.model_dump(mode="json", by_alias=True) if payload.offer_details else None,
    )
    return ApplicationDetailResponse(
        message="Application status updated successfully",
        data=ApplicationResponse.model_validate(application),
    )
