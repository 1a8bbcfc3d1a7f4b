from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user_obj
from app.core.errors import AuthError
from app.db.models.user import User
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    ProfileData,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileViewRequest,
    ProfileViewStatsResponse,
    RegisterRequest,
    UserPublic,
    VerifyTokenResponse,
)
from app.schemas.application import AppliedJobListResponse
from app.schemas.common import MessageResponse
from app.services import auth_service
from app.api.routes.profile import applied_jobs_page

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ✅ REGISTER
@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user, token = auth_service.register(
        db,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        company=payload.company,
    )
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserPublic.model_validate(user),
    )


# ✅ LOGIN
@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = auth_service.login(db, payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user),
    )


# ✅ VERIFY TOKEN (never 401s: reports validity in the body)
@router.get("/verify-token", response_model=VerifyTokenResponse, response_model_exclude_none=True)
def verify_token(request: Request, db: Session = Depends(get_db)):
    header: Optional[str] = request.headers.get("Authorization")
    if not header:
        return VerifyTokenResponse(valid=False, message="No token provided")

    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return VerifyTokenResponse(valid=False, message="Token is not valid")

    try:
        user = auth_service.verify_token(db, token)
    except AuthError as e:
        return VerifyTokenResponse(valid=False, message=e.message)
    return VerifyTokenResponse(valid=True, user=UserPublic.model_validate(user))


# ✅ CURRENT USER
@router.get("/me", response_model=MeResponse)
def me(user: User = Depends(get_current_user_obj)):
    return MeResponse(data=UserPublic.model_validate(user))


# ✅ PROFILE
@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user_obj)):
    return ProfileResponse(data=ProfileData.model_validate(user))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    user = auth_service.update_profile(db, user, payload.model_dump(exclude_unset=True))
    return ProfileResponse(message="Profile updated successfully", data=ProfileData.model_validate(user))


@router.post("/profile/view", response_model=MessageResponse)
def track_profile_view(
    payload: ProfileViewRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    if payload.viewed_user_id == user.id:
        return MessageResponse(message="Self-view not tracked")
    auth_service.track_profile_view(db, user, payload.viewed_user_id)
    return MessageResponse(message="Profile view tracked")


@router.get("/profile/stats", response_model=ProfileViewStatsResponse)
def profile_stats(user: User = Depends(get_current_user_obj), db: Session = Depends(get_db)):
    return ProfileViewStatsResponse(stats=auth_service.profile_view_stats(db, user))


@router.get("/applied-jobs", response_model=AppliedJobListResponse)
def applied_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    return applied_jobs_page(db, user, page, limit)
