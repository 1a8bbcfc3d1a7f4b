import enum
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.db.base import Base


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    SHORTLISTED = "shortlisted"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    HIRED = "hired"


class InterviewType(str, enum.Enum):
    PHONE = "phone"
    VIDEO = "video"
    IN_PERSON = "in-person"
    TECHNICAL = "technical"


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    applicant_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # NULL = anonymous
    status = Column(String, default=ApplicationStatus.PENDING.value, nullable=False, index=True)

    # Submitted form
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    current_location = Column(String, nullable=False)
    experience = Column(String, nullable=False)
    education = Column(String, nullable=False)
    cover_letter = Column(Text, nullable=True)
    current_company = Column(String, nullable=True)
    current_position = Column(String, nullable=True)
    expected_salary = Column(String, nullable=True)
    notice_period = Column(String, nullable=True)
    portfolio = Column(String, nullable=True)
    linkedin_profile = Column(String, nullable=True)
    resume = Column(String, nullable=True)  # URL only

    # Interview scheduling
    interview_scheduled = Column(Boolean, default=False, nullable=False)
    interview_date = Column(DateTime, nullable=True)
    interview_type = Column(String, default=InterviewType.PHONE.value, nullable=True)
    interview_notes = Column(Text, nullable=True)

    rejection_reason = Column(Text, nullable=True)
    offer_details = Column(JSON, nullable=True)  # salary, startDate, benefits, notes

    applied_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User")
    notes = relationship(
        "ApplicationNote",
        back_populates="application",
        order_by="ApplicationNote.added_at",
        cascade="all, delete-orphan",
    )

    # NULL applicant_id values never collide, so anonymous submissions are exempt
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),
        Index("idx_application_applicant_applied", "applicant_id", "applied_at"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, status='{self.status}')>"


class ApplicationNote(Base):
    """Recruiter note appended on a status change."""
    __tablename__ = "application_notes"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    added_by = Column(String, nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    application = relationship("Application", back_populates="notes")
