"""
Security helpers
Password normalization/hashing and JWT creation/validation
"""
import base64
import binascii
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from rentmanager.core.config import settings

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


# ==================== Passwords ====================

def is_base64_encoded(value: str) -> bool:
    """Return True when the value decodes cleanly as standard base64."""
    if not value or len(value) % 4 != 0 or not _BASE64_RE.match(value):
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def encode_password(plain: str) -> str:
    return base64.b64encode(plain.encode("utf-8")).decode("ascii")


def normalize_password(value: str) -> str:
    """
    Bring a client supplied password into its canonical base64 form.

    The frontend sends base64 encoded passwords; anything that is not valid
    base64 is treated as plain text and encoded.
    """
    if is_base64_encoded(value):
        return value
    return encode_password(value)


def get_password_hash(password_base64: str) -> str:
    """Hash the canonical base64 form of a password"""
    return pwd_context.hash(password_base64)


def verify_password(password_base64: str, hashed_password: Optional[str]) -> bool:
    """Verify a base64 password against the stored hash"""
    if not hashed_password:
        return False
    return pwd_context.verify(password_base64, hashed_password)


# ==================== JWT ====================

def create_access_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT for a user.

    Args:
        user: User model instance
        expires_delta: Optional lifetime override

    Returns:
        Encoded token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    to_encode = {
        "user_id": str(user.id),
        "email": user.email,
        "role": role,
        "person_id": str(user.person_id) if user.person_id else "",
        "sub": str(user.id),
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "nbf": now,
        "exp": expire,
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT. Returns the claims or None."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None
