"""
Pydantic schemas for job application endpoints.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import EmailStr, Field, field_validator

from app.db.models.application import ApplicationStatus, InterviewType
from app.schemas.common import CamelModel, Pagination
from app.schemas.job import JobSummary

STATUS_PATTERN = "^(" + "|".join(s.value for s in ApplicationStatus) + ")$"
INTERVIEW_TYPE_PATTERN = "^(" + "|".join(t.value for t in InterviewType) + ")$"


class ApplicationFields(CamelModel):
    """Fields an applicant fills in, as stored."""
    full_name: str
    email: str
    phone: str
    current_location: str
    experience: str
    education: str
    cover_letter: Optional[str] = None
    current_company: Optional[str] = None
    current_position: Optional[str] = None
    expected_salary: Optional[str] = None
    notice_period: Optional[str] = None
    portfolio: Optional[str] = None
    linkedin_profile: Optional[str] = None
    resume: Optional[str] = None


class ApplicationForm(ApplicationFields):
    """Fields an applicant fills in, as submitted."""
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)
    current_location: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    education: str = Field(..., min_length=1)
    cover_letter: Optional[str] = None
    current_company: Optional[str] = None
    current_position: Optional[str] = None
    expected_salary: Optional[str] = None
    notice_period: Optional[str] = None
    portfolio: Optional[str] = None
    linkedin_profile: Optional[str] = None
    resume: Optional[str] = Field(None, description="Resume URL")

    @field_validator("full_name", "phone", "current_location", "experience", "education")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v


class ApplicationCreate(ApplicationForm):
    """Authenticated application."""
    job_id: int = Field(..., description="Job being applied for")


class PublicApplicationCreate(ApplicationCreate):
    """Anonymous application: the cover letter is mandatory here."""
    cover_letter: str = Field(..., min_length=1)


class InterviewDetails(CamelModel):
    date: Optional[datetime] = None
    type: str = Field("phone", pattern=INTERVIEW_TYPE_PATTERN)
    notes: Optional[str] = None


class OfferDetails(CamelModel):
    salary: Optional[str] = None
    start_date: Optional[datetime] = None
    benefits: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    status: str = Field(..., pattern=STATUS_PATTERN)
    notes: Optional[str] = Field(None, description="Recruiter note appended to the history")
    interview: Optional[InterviewDetails] = None
    rejection_reason: Optional[str] = None
    offer_details: Optional[OfferDetails] = None


class NoteResponse(CamelModel):
    content: str
    added_by: str
    added_at: datetime


class ApplicantSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class ApplicationResponse(ApplicationFields):
    id: int
    job_id: int
    applicant_id: Optional[int] = None
    status: str
    notes: List[NoteResponse] = Field(default_factory=list)
    interview_scheduled: bool = False
    interview_date: Optional[datetime] = None
    interview_type: Optional[str] = None
    interview_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    offer_details: Optional[Dict[str, Any]] = None
    applied_at: datetime
    updated_at: datetime
    job: Optional[JobSummary] = None
    applicant: Optional[ApplicantSummary] = None


class ApplicationDetailResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: ApplicationResponse


class ApplicationListResponse(CamelModel):
    success: bool = True
    data: List[ApplicationResponse]
    pagination: Pagination


class AppliedJobEntry(CamelModel):
    """One row of a user's applied-jobs view."""
    id: int
    application_id: int
    job_id: int
    title: str
    company: str
    location: str
    type: str
    category: Optional[str] = None
    salary: Optional[str] = None
    status: str
    applied_at: datetime
    job_posted_at: Optional[datetime] = None


class AppliedJobListResponse(CamelModel):
    success: bool = True
    jobs: List[AppliedJobEntry]
    pagination: Pagination


class ActivityEntry(CamelModel):
    id: int
    type: str = "application"
    title: str
    description: str
    status: str
    time: datetime
    job_id: int


class ActivityListResponse(CamelModel):
    success: bool = True
    activities: List[ActivityEntry]


class ApplicationLimits(CamelModel):
    current: int
    max: int
    remaining: int
    percentage: int
    plan: str
    plan_name: str
    is_limit_reached: bool


class ApplicationLimitsResponse(CamelModel):
    success: bool = True
    data: ApplicationLimits
