"""
Email Endpoints (admin)
"""
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import require_admin
from rentmanager.database import get_db
from rentmanager.repositories import UserRepository, to_uuid
from rentmanager.schemas.email import AnnualReminderRequest, CustomEmailRequest
from rentmanager.services import email_service, reminder_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Emails"], dependencies=[Depends(require_admin)])


@router.post("/custom")
def send_custom_email(request: CustomEmailRequest, db: Session = Depends(get_db)):
    """Send a free-form email to the user linked to a person"""
    try:
        person_id = to_uuid(request.recipient_person_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid recipient_person_id format")

    if not request.subject.strip():
        raise HTTPException(status_code=400, detail="Subject cannot be empty")
    if not request.body.strip():
        raise HTTPException(status_code=400, detail="Body cannot be empty")

    user = UserRepository(db).get_by_person_id(person_id)
    if user is None or not user.email:
        raise HTTPException(status_code=404, detail="Recipient user not found or email is missing")

    if not email_service.send_email(user.email, request.subject, request.body):
        logger.error(f"[EMAIL] Custom email to {user.email} failed")
        raise HTTPException(status_code=500, detail="Failed to send email")

    return {"message": f"Custom email sent successfully to {user.email}"}


@router.post("/annual-renewal-reminders", status_code=status.HTTP_202_ACCEPTED)
def trigger_annual_renewal_reminders(
    background_tasks: BackgroundTasks,
    request: Optional[AnnualReminderRequest] = Body(None),
):
    """
    Queue the lease renewal reminder run and return immediately.

    The run uses its own database session; its outcome is only logged.
    """
    optional_message = request.optional_message if request is not None else ""
    background_tasks.add_task(reminder_service.send_annual_renewal_reminders, optional_message or "")
    logger.info("[REMINDER] Annual renewal reminder run queued")
    return {"message": "Annual renewal reminder process started. Emails will be sent in the background."}
