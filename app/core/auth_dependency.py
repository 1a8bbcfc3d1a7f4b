from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.errors import TokenMissing, InvalidToken
from app.db.session import SessionLocal
from app.db.models.user import User
from app.services.auth_service import verify_token

# auto_error=False so missing and malformed headers map to our own reason codes
bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Extract the raw bearer token from the Authorization header."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    if request.headers.get("Authorization"):
        # Present but not "Bearer <token>"
        raise InvalidToken()
    raise TokenMissing()


def get_current_user_obj(
    token: str = Depends(get_token),
    db: Session = Depends(get_db)
) -> User:
    """Get current User object from JWT token."""
    return verify_token(db, token)
