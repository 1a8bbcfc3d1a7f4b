import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from jose import jwt, JWTError, ExpiredSignatureError
from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_DAYS, BCRYPT_ROUNDS
from app.core.errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

# passlib is only consulted for hashes bcrypt itself refuses to parse
try:
    pwd_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
    )
    logger.debug("Password context initialized")
except Exception as e:
    logger.warning(f"Failed to initialize passlib context: {e}, using bcrypt directly")
    pwd_context = None


def _password_bytes(password: str) -> bytes:
    """Encode a password, clipped to bcrypt's 72-byte limit on a character boundary."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password_bytes
    logger.warning("Password exceeds 72 bytes, truncating before hashing (validation should have caught this)")
    clipped = password_bytes[:BCRYPT_MAX_BYTES]
    return clipped.decode("utf-8", errors="ignore").encode("utf-8")


def hash_password(password: str) -> str:
    """
    Hash a password with a per-password salt.

    The cost factor comes from BCRYPT_ROUNDS (12 unless overridden).

    Raises:
        ValueError: If the password cannot be hashed
    """
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    Returns False for accounts without a password hash.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        # Legacy hashes bcrypt cannot parse directly
        if pwd_context:
            try:
                return pwd_context.verify(password, hashed)
            except (ValueError, TypeError):
                return False
        return False


def create_access_token(subject: Any, expires_delta: timedelta = None) -> str:
    """Issue a signed bearer token whose subject is the user id."""
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {"sub": str(subject), "iat": now, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Validate signature and expiry and return the token claims.

    Raises:
        TokenExpired: The expiry has elapsed
        InvalidToken: Bad signature, malformed token or missing subject
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise InvalidToken()

    if not payload.get("sub"):
        raise InvalidToken()
    return payload
