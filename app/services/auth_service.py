"""
Account service: registration, login, token verification, profile data and
profile-view tracking.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    AuthError, DuplicateEmail, InvalidCredentials, InvalidToken, NotFound, ValidationError,
)
from app.core.logging_config import sanitize_log_data
from app.core.security import hash_password, verify_password, create_access_token, decode_access_token
from app.db.models.user import User, UserRole, ProfileView

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
SELF_REGISTER_ROLES = {UserRole.JOB_SEEKER.value, UserRole.RECRUITER.value}
PROFILE_STATS_WINDOW = timedelta(days=30)

# Top-level ProfileUpdateRequest fields that live inside the profile blob
PROFILE_BLOB_FIELDS = {
    "phone": "phone",
    "location": "location",
    "bio": "bio",
    "skills": "skills",
    "experience": "experience",
    "education": "education",
    "resume": "resume",
    "linkedin": "linkedin",
    "github": "github",
    "portfolio": "portfolio",
    "resume_data": "resumeData",
    "resume_template": "resumeTemplate",
    "resume_colors": "resumeColors",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def register(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    role: str = UserRole.JOB_SEEKER.value,
    company: Optional[str] = None,
) -> Tuple[User, str]:
    """
    Create an account and issue its first token.

    Raises:
        ValidationError: short password, unknown role, recruiter without company
        DuplicateEmail: the email is already registered

    Returns:
        (user, token)
    """
    logger.debug(f"Registration attempt: {sanitize_log_data({'email': email, 'role': role, 'password': password})}")

    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "message": "Password must be at least 8 characters"})
    if role not in SELF_REGISTER_ROLES:
        errors.append({"field": "role", "message": "Role must be job-seeker or recruiter"})
    if role == UserRole.RECRUITER.value and not (company and company.strip()):
        errors.append({"field": "company", "message": "Company name is required for recruiters"})
    if errors:
        raise ValidationError(errors=errors)

    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise DuplicateEmail()

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        company=company.strip() if role == UserRole.RECRUITER.value else None,
        profile={},
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info(f"User registered: user_id={user.id}, role={user.role}")
    return user, create_access_token(user.id)


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    """
    Check credentials, stamp last_login and issue a new token.

    Raises:
        InvalidCredentials: unknown email, passwordless account or wrong password
    """
    user = get_user_by_email(db, email)
    if not user:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentials()

    if not user.has_password:
        logger.warning(f"Login failed: user_id={user.id} has no password set")
        raise InvalidCredentials(
            "This account was created with an external sign-in provider. Please use that sign-in method instead."
        )

    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: wrong password for user_id={user.id}")
        raise InvalidCredentials()

    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"User logged in: user_id={user.id}")
    return user, create_access_token(user.id)


def verify_token(db: Session, token: str) -> User:
    """
    Decode a bearer token and load the principal it names.

    Pure read: nothing about the user is modified.

    Raises:
        TokenExpired: expiry elapsed
        InvalidToken: bad signature or malformed subject
        AuthError: the user named by the token no longer exists
    """
    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise InvalidToken()

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthError("Token is not valid", code="user_not_found")
    return user


def update_profile(db: Session, user: User, changes: Dict[str, Any]) -> User:
    """
    Apply a partial profile update.

    Args:
        changes: snake_case field -> value, only the fields the client sent

    Raises:
        DuplicateEmail: the new email belongs to another account
    """
    logger.debug(f"Profile update payload: user_id={user.id}, {sanitize_log_data(changes)}")

    for field in ("first_name", "last_name", "photo_url"):
        if field in changes and changes[field] is not None:
            setattr(user, field, changes[field])

    if changes.get("email"):
        new_email = normalize_email(changes["email"])
        if new_email != user.email:
            existing = get_user_by_email(db, new_email)
            if existing and existing.id != user.id:
                raise DuplicateEmail()
            user.email = new_email

    # Reassign so the JSON column is flagged dirty
    profile = dict(user.profile or {})
    if changes.get("profile"):
        profile.update(changes["profile"])
    for field, key in PROFILE_BLOB_FIELDS.items():
        if field in changes:
            profile[key] = changes[field]
    if "resume_data" in changes:
        profile["resumeUpdatedAt"] = datetime.utcnow().isoformat()
    user.profile = profile

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info(f"Profile updated: user_id={user.id}, fields={sorted(changes)}")
    return user


def track_profile_view(db: Session, viewer: User, viewed_user_id: int) -> bool:
    """
    Record that viewer looked at another user's profile.

    Self-views are ignored and a viewer counts at most once per calendar day.

    Returns:
        True if a new view was recorded
    """
    if viewed_user_id == viewer.id:
        return False

    viewed_user = db.query(User).filter(User.id == viewed_user_id).first()
    if not viewed_user:
        raise NotFound("User not found")

    now = datetime.utcnow()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    already_viewed = db.query(ProfileView).filter(
        ProfileView.viewed_user_id == viewed_user_id,
        ProfileView.viewer_id == viewer.id,
        ProfileView.viewed_at >= start_of_day,
        ProfileView.viewed_at < start_of_day + timedelta(days=1),
    ).first()
    if already_viewed:
        return False

    db.add(ProfileView(viewed_user_id=viewed_user_id, viewer_id=viewer.id, viewed_at=now))
    viewed_user.last_profile_view = now
    db.commit()
    logger.debug(f"Profile view recorded: viewed_user_id={viewed_user_id}, viewer_id={viewer.id}")
    return True


def percentage_change(current: int, previous: int) -> int:
    if previous > 0:
        return round((current - previous) / previous * 100)
    return 100 if current > 0 else 0


def profile_view_stats(db: Session, user: User, now: datetime = None) -> Dict[str, int]:
    """Total views plus this 30-day window against the one before it."""
    now = now or datetime.utcnow()
    window_start = now - PROFILE_STATS_WINDOW
    previous_start = window_start - PROFILE_STATS_WINDOW

    base = db.query(func.count(ProfileView.id)).filter(ProfileView.viewed_user_id == user.id)
    total = base.scalar() or 0
    last_month = base.filter(ProfileView.viewed_at >= window_start).scalar() or 0
    previous_month = base.filter(
        ProfileView.viewed_at >= previous_start,
        ProfileView.viewed_at < window_start,
    ).scalar() or 0

    return {
        "total_views": total,
        "last_month_views": last_month,
        "previous_month_views": previous_month,
        "percentage_change": percentage_change(last_month, previous_month),
    }
