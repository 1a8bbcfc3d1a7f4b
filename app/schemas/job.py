"""
Pydantic schemas for job endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from app.db.models.job import JobType, WorkMode
from app.schemas.common import CamelModel, Pagination

JOB_TYPE_PATTERN = "^(" + "|".join(t.value for t in JobType) + ")$"
WORK_MODE_PATTERN = "^(" + "|".join(m.value for m in WorkMode) + ")$"


class JobBase(CamelModel):
    """Base job schema with the mandatory posting fields."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    company: str = Field(..., description="Company name", min_length=1, max_length=255)
    location: str = Field(..., description="Job location", min_length=1, max_length=255)
    type: str = Field(..., description="Employment type", pattern=JOB_TYPE_PATTERN)
    category: str = Field(..., description="Job category", min_length=1, max_length=100)
    description: str = Field(..., description="Job description", min_length=1)
    requirements: str = Field(..., description="Requirements", min_length=1)
    responsibilities: str = Field(..., description="Responsibilities", min_length=1)
    experience: str = Field(..., description="Experience level", min_length=1)
    education: str = Field(..., description="Education requirement", min_length=1)

    salary_range: Optional[str] = Field(None, description="Salary range, free text")
    skills: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False
    application_deadline: Optional[datetime] = None
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    work_mode: str = Field("on-site", pattern=WORK_MODE_PATTERN)


class JobCreate(JobBase):
    """Schema for creating a new job."""

    @field_validator(
        "title", "company", "location", "category", "description",
        "requirements", "responsibilities", "experience", "education",
    )
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Backend Engineer",
                "company": "Acme",
                "location": "Remote",
                "type": "full-time",
                "category": "Technology",
                "description": "Build and run our APIs.",
                "requirements": "3+ years of Python",
                "responsibilities": "Design services, review code",
                "experience": "Mid-level",
                "education": "Bachelor's degree",
                "salaryRange": "$100,000 - $130,000",
                "skills": ["python", "sql"],
                "workMode": "remote"
            }
        }


class JobUpdate(CamelModel):
    """Schema for updating an existing job. Only provided fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, pattern=JOB_TYPE_PATTERN)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = Field(None, min_length=1)
    responsibilities: Optional[str] = Field(None, min_length=1)
    experience: Optional[str] = Field(None, min_length=1)
    education: Optional[str] = Field(None, min_length=1)
    salary_range: Optional[str] = None
    skills: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    application_deadline: Optional[datetime] = None
    company_logo: Optional[str] = None
    company_website: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    work_mode: Optional[str] = Field(None, pattern=WORK_MODE_PATTERN)

    # Omit these to leave them unchanged; null would land on a NOT NULL column
    @field_validator(
        "title", "company", "location", "type", "category", "description",
        "requirements", "responsibilities", "experience", "education",
        "skills", "benefits", "tags", "is_active", "is_featured", "work_mode",
        mode="before",
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class PosterSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    company: Optional[str] = None


class JobResponse(JobBase):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    posted_by: int = Field(..., description="User ID of the posting recruiter")
    poster: Optional[PosterSummary] = None
    is_active: bool
    views: int = 0
    total_applications: int = 0
    created_at: datetime
    updated_at: datetime


class JobSummary(CamelModel):
    """Compact job view embedded in application responses."""
    id: int
    title: str
    company: str
    location: str
    type: str
    category: Optional[str] = None
    salary_range: Optional[str] = None
    posted_by: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class JobDetailResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: JobResponse


class JobListResponse(CamelModel):
    """Schema for a paged list of jobs."""
    success: bool = True
    data: List[JobResponse] = Field(..., description="List of jobs")
    pagination: Pagination


class CategoryCount(CamelModel):
    name: str
    count: int


class CategoryListResponse(CamelModel):
    success: bool = True
    data: List[CategoryCount]


class CompanySummary(CamelModel):
    id: int
    name: str
    jobs: int
    logo: str


class CompanyListResponse(CamelModel):
    success: bool = True
    companies: List[CompanySummary]
    total: int
