"""
User account model plus the per-user child rows (profile views, applied-job references).
"""
import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from app.db.base import Base


class UserRole(str, enum.Enum):
    JOB_SEEKER = "job-seeker"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)  # always stored lower-cased
    password_hash = Column(String, nullable=True)  # NULL for externally-authenticated accounts
    role = Column(String, nullable=False, default=UserRole.JOB_SEEKER.value)
    company = Column(String, nullable=True)  # required for recruiters
    photo_url = Column(String, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    provider = Column(String, default="local", nullable=False)

    # Free-form profile blob: contact info, skills, resumeData, resumeTemplate...
    profile = Column(JSON, nullable=False, default=dict)
    last_profile_view = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    jobs = relationship("Job", back_populates="poster", foreign_keys="Job.posted_by")
    profile_views = relationship(
        "ProfileView",
        back_populates="viewed_user",
        foreign_keys="ProfileView.viewed_user_id",
        order_by="ProfileView.viewed_at",
        cascade="all, delete-orphan",
    )
    applied_jobs = relationship(
        "AppliedJob",
        back_populates="user",
        order_by="AppliedJob.applied_at.desc()",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class ProfileView(Base):
    """One recruiter/user looking at another user's profile."""
    __tablename__ = "profile_views"

    id = Column(Integer, primary_key=True, index=True)
    viewed_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    viewer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    viewed_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    viewed_user = relationship("User", back_populates="profile_views", foreign_keys=[viewed_user_id])
    viewer = relationship("User", foreign_keys=[viewer_id])

    __table_args__ = (
        Index("idx_profile_view_user_viewer", "viewed_user_id", "viewer_id", "viewed_at"),
    )


class AppliedJob(Base):
    """
    Cross-reference from a user to a job they applied for.

    The status is read through the linked application instead of being
    copied here, so it can never drift from the application row.
    """
    __tablename__ = "applied_jobs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, unique=True)
    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="applied_jobs")
    job = relationship("Job")
    application = relationship("Application")

    @property
    def status(self) -> str:
        return self.application.status if self.application else "pending"
