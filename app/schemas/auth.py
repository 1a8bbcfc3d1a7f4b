"""
Pydantic schemas for authentication and profile endpoints.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for user registration."""
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: Literal["job-seeker", "recruiter"] = Field(default="job-seeker", description="Account role")
    company: Optional[str] = Field(default=None, max_length=200, description="Company name (required for recruiters)")

    @field_validator("first_name", "last_name", "company")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be 72 bytes or fewer")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "firstName": "Rita",
                "lastName": "Recruiter",
                "email": "r@x.com",
                "password": "SecurePass123",
                "role": "recruiter",
                "company": "Acme"
            }
        }


class LoginRequest(CamelModel):
    """Request schema for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class UserPublic(CamelModel):
    """Public view of a user; never carries the password hash."""
    id: int
    first_name: str
    last_name: str
    email: str
    role: str
    company: Optional[str] = None
    photo_url: Optional[str] = None
    is_verified: bool = False


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: UserPublic


class VerifyTokenResponse(CamelModel):
    valid: bool
    message: Optional[str] = None
    user: Optional[UserPublic] = None


class MeResponse(CamelModel):
    success: bool = True
    data: UserPublic


class ProfileData(UserPublic):
    """User fields plus the free-form profile blob."""
    profile: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class ProfileResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: ProfileData


class ProfileUpdateRequest(CamelModel):
    """
    Partial profile update.

    Named contact fields are stored inside the profile blob; `profile` is
    shallow-merged into it; `resume_data` replaces the resume-builder document.
    """
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    photo_url: Optional[str] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=30)
    location: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = Field(None, max_length=500)
    skills: Optional[List[str]] = None
    experience: Optional[str] = Field(None, min_length=1)
    education: Optional[str] = Field(None, min_length=1)
    resume: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    resume_data: Optional[Dict[str, Any]] = None
    resume_template: Optional[str] = None
    resume_colors: Optional[Dict[str, Any]] = None
    profile: Optional[Dict[str, Any]] = None


class ProfileViewRequest(CamelModel):
    viewed_user_id: int = Field(..., description="User whose profile was viewed")


class ProfileViewStats(CamelModel):
    total_views: int
    last_month_views: int
    previous_month_views: int
    percentage_change: int


class ProfileViewStatsResponse(CamelModel):
    success: bool = True
    stats: ProfileViewStats
