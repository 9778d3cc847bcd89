"""
Manager Invitation Endpoint (admin)
"""
import logging
import random
import secrets
import time

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.config import settings
from rentmanager.core.deps import require_admin
from rentmanager.core.security import encode_password, get_password_hash
from rentmanager.database import get_db
from rentmanager.models.person import Person
from rentmanager.models.user import User, UserRole, UserStatus
from rentmanager.repositories import UserRepository
from rentmanager.schemas.invitation import ManagerInvitationRequest, ManagerInvitationResponse
from rentmanager.services import email_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Invitations"], dependencies=[Depends(require_admin)])


def generate_temp_nit() -> str:
    """Placeholder NIT until the manager completes onboarding"""
    return f"TEMP-{time.time_ns()}-{random.randint(0, 999999):06d}"


@router.post("/manager", response_model=ManagerInvitationResponse, status_code=status.HTTP_201_CREATED)
def invite_manager(request: ManagerInvitationRequest, db: Session = Depends(get_db)):
    """
    Create a manager account and email the temporary credentials.

    A delivery failure does not undo the account; it is only logged.
    """
    logger.info(f"[EMAIL] Manager invitation requested for {request.name} <{request.email}>")

    try:
        user_status = UserStatus(request.status or UserStatus.NEW_USER.value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid status: {request.status}")

    if UserRepository(db).get_by_email(request.email) is not None:
        raise HTTPException(status_code=400, detail="A user with this email already exists")

    temp_password = request.temp_password or secrets.token_urlsafe(9)

    try:
        person = Person(full_name=request.name, phone="", nit=generate_temp_nit())
        db.add(person)
        db.flush()

        user = User(
            email=request.email,
            password_hash=get_password_hash(encode_password(temp_password)),
            role=UserRole.MANAGER,
            status=user_status,
            person_id=person.id,
        )
        db.add(user)
        db.commit()
        db.refresh(person)
        db.refresh(user)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create invited manager {request.email}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create user account")

    logger.info(f"Created manager user {user.id} for {request.email} with status '{user_status.value}'")

    login_url = f"{settings.APP_BASE_URL}/login"
    if not email_service.send_manager_invitation_email(
        request.email, request.name, temp_password, login_url, request.message
    ):
        logger.error(f"[EMAIL] Invitation email to {request.email} could not be delivered")

    return ManagerInvitationResponse(
        message="User created and invitation email sent successfully.",
        email=request.email,
        person_id=person.id,
        user_id=user.id,
        temp_password=temp_password,
    )
