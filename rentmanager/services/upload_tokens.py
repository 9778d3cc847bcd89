"""
In-memory store for one-time upload links.

Tokens live only in this process and are lost on restart.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from rentmanager.schemas.file_upload import UploadToken

logger = logging.getLogger(__name__)

upload_tokens: Dict[str, UploadToken] = {}


class TokenError(Exception):
    """Token exists but can no longer be used"""


def create_token(
    email: str,
    name: str,
    user_id: str,
    person_id: str,
    created_by: str,
    expiration_days: int = 7,
) -> UploadToken:
    if expiration_days <= 0:
        expiration_days = 7
    now = datetime.now(timezone.utc)
    token = UploadToken(
        token=secrets.token_hex(32),
        email=email,
        name=name,
        user_id=user_id,
        person_id=person_id,
        created_at=now,
        expires_at=now + timedelta(days=expiration_days),
        used=False,
        created_by=created_by,
    )
    upload_tokens[token.token] = token
    logger.info(f"[UPLOAD] Upload token issued for {email} (expires {token.expires_at.isoformat()})")
    return token


def get_token(token: str) -> Optional[UploadToken]:
    return upload_tokens.get(token)


def list_tokens() -> List[UploadToken]:
    return list(upload_tokens.values())


def validate_token(token: UploadToken, now: Optional[datetime] = None) -> None:
    """Raise TokenError when the token is expired or already used"""
    now = now or datetime.now(timezone.utc)
    if now > token.expires_at:
        raise TokenError("Token expirado")
    if token.used:
        raise TokenError("Token ya utilizado")


def mark_used(token: UploadToken) -> None:
    token.used = True
