"""
Job store: search, CRUD with ownership checks, view counting and company
aggregation.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Query, Session, joinedload

from app.core.errors import NotFound
from app.core.gating import require_ownership
from app.db.models.job import Job
from app.db.models.user import User

logger = logging.getLogger(__name__)

# Public sort keys -> columns
SORT_FIELDS = {
    "createdAt": Job.created_at,
    "updatedAt": Job.updated_at,
    "title": Job.title,
    "company": Job.company,
    "views": Job.views,
    "totalApplications": Job.total_applications,
    "applicationDeadline": Job.application_deadline,
}
DEFAULT_COMPANY_LIMIT = 12


def _like(value: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def active_jobs(db: Session) -> Query:
    return db.query(Job).filter(Job.is_active.is_(True))


def apply_filters(
    query: Query,
    category: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    company: Optional[str] = None,
    search: Optional[str] = None,
) -> Query:
    """AND together every filter that was supplied."""
    if category and category.lower() != "all":
        query = query.filter(Job.category.ilike(_like(category), escape="\\"))
    if location:
        query = query.filter(Job.location.ilike(_like(location), escape="\\"))
    if job_type:
        query = query.filter(Job.type == job_type)
    if company:
        query = query.filter(Job.company.ilike(_like(company), escape="\\"))
    if search and search.strip():
        term = _like(search.strip())
        query = query.filter(
            or_(
                Job.title.ilike(term, escape="\\"),
                Job.description.ilike(term, escape="\\"),
                Job.company.ilike(term, escape="\\"),
            )
        )
    return query


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], int]:
    """Return one page of rows plus the total count."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def list_jobs(
    db: Session,
    page: int = 1,
    limit: int = 10,
    category: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    company: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> Tuple[List[Job], int]:
    """
    Filtered, sorted, paginated listing of active jobs.

    Unknown sort keys fall back to newest first.
    """
    query = apply_filters(
        active_jobs(db).options(joinedload(Job.poster)),
        category=category,
        location=location,
        job_type=job_type,
        company=company,
        search=search,
    )
    column = SORT_FIELDS.get(sort_by, Job.created_at)
    ordering = column.asc() if sort_order == "asc" else column.desc()
    query = query.order_by(ordering, Job.id.desc())
    return paginate(query, page, limit)


def list_jobs_for_owner(db: Session, owner: User, page: int = 1, limit: int = 10) -> Tuple[List[Job], int]:
    """A recruiter's own postings, inactive ones included."""
    query = db.query(Job).filter(Job.posted_by == owner.id).order_by(Job.created_at.desc(), Job.id.desc())
    return paginate(query, page, limit)


def get_job(db: Session, job_id: int) -> Job:
    """Fetch a job by id whether or not it is active."""
    job = db.query(Job).options(joinedload(Job.poster)).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")
    return job


def categories_with_counts(db: Session) -> List[Dict[str, Any]]:
    rows = (
        db.query(Job.category, func.count(Job.id))
        .filter(Job.is_active.is_(True))
        .group_by(Job.category)
        .order_by(func.count(Job.id).desc(), Job.category)
        .all()
    )
    return [{"name": name, "count": count} for name, count in rows]


def count_active(db: Session) -> int:
    return active_jobs(db).count()


def aggregate_by_company(db: Session, limit: int = DEFAULT_COMPANY_LIMIT) -> List[Dict[str, Any]]:
    """
    Top companies by number of postings.

    Groups every job with a non-empty company name, active or not; company
    names are grouped exactly as stored.
    """
    job_count = func.count(Job.id).label("job_count")
    rows = (
        db.query(Job.company, job_count)
        .filter(Job.company.isnot(None), Job.company != "")
        .group_by(Job.company)
        .order_by(job_count.desc(), Job.company)
        .limit(limit)
        .all()
    )
    return [
        {"id": index, "name": name, "jobs": count, "logo": name[:2].upper()}
        for index, (name, count) in enumerate(rows, start=1)
    ]


def create_job(db: Session, data: Dict[str, Any], owner: User) -> Job:
    """Create a posting owned by the given recruiter; new jobs start active."""
    job = Job(**data, posted_by=owner.id, is_active=True)
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info(f"Job created: job_id={job.id}, user_id={owner.id}, company={job.company}")
    return job


def update_job(db: Session, job_id: int, changes: Dict[str, Any], owner: User) -> Job:
    """
    Merge the provided fields into a job.

    Raises:
        NotFound: job absent
        Forbidden: owner did not post the job
    """
    job = get_job(db, job_id)
    require_ownership(owner, job.posted_by, "Not authorized to update this job")

    for field, value in changes.items():
        setattr(job, field, value)
    job.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(job)
    logger.info(f"Job updated: job_id={job.id}, user_id={owner.id}, fields={sorted(changes)}")
    return job


def soft_delete_job(db: Session, job_id: int, owner: User) -> Job:
    """Deactivate a job; it stays readable by id but leaves every listing."""
    job = get_job(db, job_id)
    require_ownership(owner, job.posted_by, "Not authorized to delete this job")

    job.is_active = False
    job.updated_at = datetime.utcnow()
    db.commit()
    logger.info(f"Job deactivated: job_id={job_id}, user_id={owner.id}")
    return job


def record_view(db: Session, job_id: int) -> None:
    """Bump the view counter with a SQL-side increment."""
    db.execute(update(Job).where(Job.id == job_id).values(views=Job.views + 1))
    db.commit()
