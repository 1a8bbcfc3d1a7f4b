"""
Application store and status machine.

Handles submission (with its job counter and applicant cross-reference),
recruiter status transitions, visibility rules and applicant reporting.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from app.core.errors import DuplicateApplication, Forbidden, NotFound
from app.core.gating import require_ownership
from app.core.logging_config import sanitize_log_data
from app.core.plan_limits import get_monthly_application_limit, get_plan_name, DEFAULT_PLAN
from app.db.models.application import Application, ApplicationNote, ApplicationStatus
from app.db.models.job import Job
from app.db.models.user import User, AppliedJob
from app.services.job_service import paginate

logger = logging.getLogger(__name__)

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)


def _with_relations(query: Query) -> Query:
    return query.options(
        joinedload(Application.job),
        joinedload(Application.applicant),
        selectinload(Application.notes),
    )


def get_application(db: Session, application_id: int) -> Application:
    application = _with_relations(db.query(Application)).filter(Application.id == application_id).first()
    if not application:
        raise NotFound("Application not found")
    return application


def submit_application(
    db: Session,
    job_id: int,
    form: Dict[str, Any],
    applicant: Optional[User] = None,
) -> Application:
    """
    Submit an application for an active job.

    Inserting the application, bumping the job's counter and appending the
    applicant's applied-job reference commit together or not at all.

    Raises:
        NotFound: job missing or no longer active
        DuplicateApplication: applicant already applied to this job
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job or not job.is_active:
        raise NotFound("Job not found or no longer available")

    if applicant is not None:
        existing = db.query(Application.id).filter(
            Application.job_id == job_id,
            Application.applicant_id == applicant.id,
        ).first()
        if existing:
            raise DuplicateApplication()

    logger.debug(f"Application form: job_id={job_id}, {sanitize_log_data(form)}")

    now = datetime.utcnow()
    application = Application(
        job_id=job_id,
        applicant_id=applicant.id if applicant is not None else None,
        status=ApplicationStatus.PENDING.value,
        applied_at=now,
        **form,
    )

    try:
        db.add(application)
        db.flush()
        db.execute(
            update(Job)
            .where(Job.id == job_id)
            .values(total_applications=Job.total_applications + 1)
        )
        if applicant is not None:
            db.add(AppliedJob(
                user_id=applicant.id,
                job_id=job_id,
                application_id=application.id,
                applied_at=now,
            ))
        db.commit()
    except IntegrityError:
        # Unique (job_id, applicant_id) caught a concurrent duplicate
        db.rollback()
        raise DuplicateApplication()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Application submit rolled back: job_id={job_id}", exc_info=True)
        raise

    logger.info(
        f"Application submitted: application_id={application.id}, job_id={job_id}, "
        f"applicant_id={application.applicant_id}"
    )
    return get_application(db, application.id)


def transition_status(
    db: Session,
    application_id: int,
    new_status: str,
    recruiter: User,
    note: Optional[str] = None,
    interview: Optional[Dict[str, Any]] = None,
    rejection_reason: Optional[str] = None,
    offer_details: Optional[Dict[str, Any]] = None,
) -> Application:
    """
    Move an application to any status in the enum.

    Only the recruiter who posted the job may do this. The applicant's
    applied-jobs view reads status through the application, so it follows
    automatically.

    Raises:
        NotFound: application absent
        Forbidden: recruiter does not own the job
    """
    application = get_application(db, application_id)
    require_ownership(recruiter, application.job.posted_by, "Not authorized to update this application")

    previous = application.status
    application.status = ApplicationStatus(new_status).value

    if note and note.strip():
        application.notes.append(ApplicationNote(
            content=note.strip(),
            added_by=recruiter.full_name,
            added_at=datetime.utcnow(),
        ))

    if interview is not None:
        application.interview_scheduled = interview.get("date") is not None
        application.interview_date = interview.get("date")
        application.interview_type = interview.get("type") or application.interview_type
        application.interview_notes = interview.get("notes")

    if rejection_reason is not None:
        application.rejection_reason = rejection_reason
    if offer_details is not None:
        application.offer_details = offer_details

    application.updated_at = datetime.utcnow()
    db.commit()

    logger.info(
        f"Application status changed: application_id={application_id}, "
        f"{previous} -> {application.status}, by user_id={recruiter.id}"
    )
    return get_application(db, application_id)


def get_application_for_viewer(db: Session, application_id: int, viewer: User) -> Application:
    """Applications are visible to their applicant and to the job's poster."""
    application = get_application(db, application_id)
    is_applicant = application.applicant_id is not None and application.applicant_id == viewer.id
    is_job_poster = application.job is not None and application.job.posted_by == viewer.id
    if not (is_applicant or is_job_poster):
        raise Forbidden("Not authorized to view this application")
    return application


def list_for_applicant(
    db: Session,
    applicant: User,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Application], int]:
    query = _with_relations(db.query(Application)).filter(Application.applicant_id == applicant.id)
    if status:
        query = query.filter(Application.status == status)
    query = query.order_by(Application.applied_at.desc(), Application.id.desc())
    return paginate(query, page, limit)


def list_for_job(
    db: Session,
    job_id: int,
    recruiter: User,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Application], int]:
    """Applications received by a job, for the recruiter who posted it."""
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")
    require_ownership(recruiter, job.posted_by, "Not authorized to view applications for this job")

    query = _with_relations(db.query(Application)).filter(Application.job_id == job_id)
    if status:
        query = query.filter(Application.status == status)
    query = query.order_by(Application.applied_at.desc(), Application.id.desc())
    return paginate(query, page, limit)


def list_applied_jobs(db: Session, user: User, page: int = 1, limit: int = 10) -> Tuple[List[AppliedJob], int]:
    """The user's applied-job references, with job and live application status joined in."""
    query = (
        db.query(AppliedJob)
        .options(joinedload(AppliedJob.job), joinedload(AppliedJob.application))
        .filter(AppliedJob.user_id == user.id)
        .order_by(AppliedJob.applied_at.desc(), AppliedJob.id.desc())
    )
    return paginate(query, page, limit)


# ============================================
# Reporting
# ============================================

def count_in_window(
    db: Session,
    applicant_id: int,
    start: datetime,
    end: Optional[datetime] = None,
    status: Optional[str] = None,
) -> int:
    query = db.query(func.count(Application.id)).filter(
        Application.applicant_id == applicant_id,
        Application.applied_at >= start,
    )
    if end is not None:
        query = query.filter(Application.applied_at < end)
    if status:
        query = query.filter(Application.status == status)
    return query.scalar() or 0


def window_comparison(
    db: Session,
    applicant_id: int,
    window: timedelta,
    now: datetime = None,
    status: Optional[str] = None,
) -> Tuple[int, int]:
    """Counts in the trailing window and in the equally long window before it."""
    now = now or datetime.utcnow()
    current_start = now - window
    current = count_in_window(db, applicant_id, current_start, status=status)
    previous = count_in_window(db, applicant_id, current_start - window, current_start, status=status)
    return current, previous


def status_counts(db: Session, applicant_id: int) -> Dict[str, int]:
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.applicant_id == applicant_id)
        .group_by(Application.status)
        .all()
    )
    return {status: count for status, count in rows}


def application_statistics(db: Session, applicant: User, now: datetime = None) -> Dict[str, Any]:
    """Totals by status plus week-over-week and month-over-month deltas."""
    now = now or datetime.utcnow()
    counts = status_counts(db, applicant.id)
    last_week, previous_week = window_comparison(db, applicant.id, WEEK, now)
    last_month, previous_month = window_comparison(db, applicant.id, MONTH, now)

    return {
        "total": sum(counts.values()),
        "statusCounts": {status.value: counts.get(status.value, 0) for status in ApplicationStatus},
        "lastWeek": last_week,
        "previousWeek": previous_week,
        "changeFromLastWeek": last_week - previous_week,
        "lastMonth": last_month,
        "previousMonth": previous_month,
        "changeFromLastMonth": last_month - previous_month,
    }


def interview_statistics(db: Session, applicant: User, now: datetime = None) -> Dict[str, int]:
    now = now or datetime.utcnow()
    interview = ApplicationStatus.INTERVIEW.value
    base = db.query(func.count(Application.id)).filter(Application.applicant_id == applicant.id)

    total = base.filter(Application.status == interview).scalar() or 0
    this_week = count_in_window(db, applicant.id, now - WEEK, status=interview)
    scheduled = base.filter(Application.interview_scheduled.is_(True)).scalar() or 0
    upcoming = base.filter(
        Application.interview_scheduled.is_(True),
        Application.interview_date >= now,
    ).scalar() or 0

    return {
        "totalInterviews": total,
        "interviewsThisWeek": this_week,
        "scheduledInterviews": scheduled,
        "upcomingInterviews": upcoming,
        "completedInterviews": scheduled - upcoming,
    }


def offer_statistics(db: Session, applicant: User, now: datetime = None) -> Dict[str, int]:
    now = now or datetime.utcnow()
    hired = ApplicationStatus.HIRED.value
    total = db.query(func.count(Application.id)).filter(
        Application.applicant_id == applicant.id,
        Application.status == hired,
    ).scalar() or 0
    last_month = count_in_window(db, applicant.id, now - MONTH, status=hired)
    return {"totalOffers": total, "lastMonthOffers": last_month}


def recent_activities(db: Session, applicant: User, limit: int = 10) -> List[Dict[str, Any]]:
    applications = (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.applicant_id == applicant.id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": app.id,
            "type": "application",
            "title": f"Applied to {app.job.title if app.job else 'Job'} at {app.job.company if app.job else 'Company'}",
            "description": f"Applied to {app.job.company if app.job else 'Company'}",
            "status": app.status,
            "time": app.applied_at,
            "job_id": app.job_id,
        }
        for app in applications
    ]


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def application_limits(db: Session, applicant: User, now: datetime = None) -> Dict[str, Any]:
    """
    Current calendar month's applications against the plan's monthly limit.

    Reported only; submission does not enforce it.
    """
    now = now or datetime.utcnow()
    plan = DEFAULT_PLAN
    monthly_limit = get_monthly_application_limit(plan)
    current = count_in_window(db, applicant.id, start_of_month(now))

    return {
        "current": current,
        "max": monthly_limit,
        "remaining": max(0, monthly_limit - current),
        "percentage": min(100, round(current / monthly_limit * 100)) if monthly_limit else 0,
        "plan": plan,
        "plan_name": get_plan_name(plan),
        "is_limit_reached": current >= monthly_limit,
    }
