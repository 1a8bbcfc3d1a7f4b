"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.user import User, UserRole, ProfileView, AppliedJob
from app.db.models.job import Job, JobType, WorkMode
from app.db.models.application import (
    Application,
    ApplicationNote,
    ApplicationStatus,
    InterviewType,
)

# Explicitly export all models for clarity
__all__ = [
    "User",
    "UserRole",
    "ProfileView",
    "AppliedJob",
    "Job",
    "JobType",
    "WorkMode",
    "Application",
    "ApplicationNote",
    "ApplicationStatus",
    "InterviewType",
]
