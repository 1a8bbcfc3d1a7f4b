"""
Job posting model.

Postings are owned by a recruiter (or admin) and are never physically
removed: deleting a job flips is_active off.
"""
import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from app.db.base import Base


class JobType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"


class WorkMode(str, enum.Enum):
    ON_SITE = "on-site"
    REMOTE = "remote"
    HYBRID = "hybrid"


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    company = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    responsibilities = Column(Text, nullable=False)
    experience = Column(String, nullable=False)
    education = Column(String, nullable=False)
    salary_range = Column(String, nullable=True)

    skills = Column(JSON, nullable=False, default=list)
    benefits = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    posted_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    application_deadline = Column(DateTime, nullable=True)

    # Denormalized counters, bumped with SQL-side increments
    views = Column(Integer, default=0, nullable=False)
    total_applications = Column(Integer, default=0, nullable=False)

    company_logo = Column(String, nullable=True)
    company_website = Column(String, nullable=True)
    company_size = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    work_mode = Column(String, default=WorkMode.ON_SITE.value, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    poster = relationship("User", back_populates="jobs", foreign_keys=[posted_by])
    applications = relationship("Application", back_populates="job")

    __table_args__ = (
        Index("idx_job_active_created", "is_active", "created_at"),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, company='{self.company}', title='{self.title}')>"
