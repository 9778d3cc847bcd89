from datetime import datetime
from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from typing import Tuple
import logging
import uuid

from rentmanager.core.dates import parse_query_date
from rentmanager.core.security import decode_access_token
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole, UserStatus

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from the Authorization header.
    Returns 401 if the header or token is invalid, 403 if the account is disabled.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is required",
        )

    if not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format",
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(auth_header[len("Bearer "):])
    if payload is None:
        raise credentials_exception

    # user id is stored in "sub"
    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        logger.warning("Token 'sub' is not a valid user id")
        raise credentials_exception

    try:
        user = db.query(User).filter(User.id == user_id).first()
    except Exception as e:
        logger.error(f"Database error looking up user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    if user is None:
        logger.warning(f"User not found in database: {user_id}")
        raise credentials_exception

    if user.status == UserStatus.DISABLED:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account is disabled. Please contact support.",
        )

    logger.debug(f"User authenticated: {user.email} (Role: {user.role.value}, Status: {user.status.value})")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def require_manager(current_user: User = Depends(get_current_user)) -> User:
    """Admin or manager"""
    if current_user.role not in [UserRole.ADMIN, UserRole.MANAGER]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Manager or admin access required")
    return current_user


def date_range(start_date: str = Query(""), end_date: str = Query("")) -> Tuple[datetime, datetime]:
    """Required start_date/end_date query pair (YYYY-MM-DD or RFC 3339)"""
    if not start_date or not end_date:
        raise HTTPException(status_code=400, detail="start_date and end_date query parameters are required")
    try:
        start = parse_query_date(start_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid start_date format. Use YYYY-MM-DD or RFC3339 format.")
    try:
        end = parse_query_date(end_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid end_date format. Use YYYY-MM-DD or RFC3339 format.")
    return start, end
