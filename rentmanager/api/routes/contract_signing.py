"""
Contract Signing Endpoints

Admins route a generated contract to a recipient; the recipient signs or
rejects it through the public endpoints using the signing request id.
"""
import logging
import os
from typing import Optional, Tuple
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from rentmanager.core.config import settings
from rentmanager.core.dates import format_rfc3339
from rentmanager.core.deps import require_admin
from rentmanager.database import get_db
from rentmanager.models.contract_signing import ContractSigningRequest, SigningStatus
from rentmanager.repositories import (
    ContractSigningRepository,
    PersonRepository,
    PropertyRepository,
    RentalRepository,
    UserRepository,
    to_uuid,
)
from rentmanager.schemas.contract import (
    RejectResponse,
    SignResponse,
    SigningRequestCreate,
    SigningRequestCreated,
    SigningStatusResponse,
)
from rentmanager.services import contract_pdf_service, email_service, pdf_sign_service

logger = logging.getLogger(__name__)

# Public routes are mounted under both /api/public/contract-signing and /api/contract-signing
router = APIRouter(tags=["Contract Signing"])
admin_router = APIRouter(tags=["Contract Signing"], dependencies=[Depends(require_admin)])

UNKNOWN_ADDRESS = "Dirección no disponible"


def _get_request(signing: ContractSigningRepository, signing_id: UUID) -> ContractSigningRequest:
    record = signing.get(signing_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Signing request not found")
    # expiry is only ever evaluated here, when the record is read
    signing.expire_if_due(record)
    return record


def _signer_name(db: Session, record: ContractSigningRequest) -> str:
    person = PersonRepository(db).get(record.recipient_id)
    if person is not None and person.full_name:
        return person.full_name
    return record.recipient_email


def _property_address(db: Session, record: ContractSigningRequest) -> str:
    """Address of the recipient's most recent rental, if any"""
    rentals = RentalRepository(db).get_by_renter(record.recipient_id)
    if not rentals:
        return UNKNOWN_ADDRESS
    prop = PropertyRepository(db).get(rentals[-1].property_id)
    return prop.address if prop is not None else UNKNOWN_ADDRESS


def _contract_pdf(db: Session, record: ContractSigningRequest) -> bytes:
    """The stored contract, or a minimal stand-in when it was never generated"""
    path = contract_pdf_service.contract_path(str(record.contract_id))
    if os.path.exists(path):
        with open(path, "rb") as f:
            return f.read()

    logger.info(f"[SIGNING] Contract file {path} not found, building a basic contract")
    pdf_bytes = contract_pdf_service.build_simple_contract_pdf(
        str(record.contract_id), _property_address(db, record), _signer_name(db, record)
    )
    contract_pdf_service.save_contract(str(record.contract_id), pdf_bytes)
    return pdf_bytes


def _signed_pdf(db: Session, record: ContractSigningRequest) -> Tuple[bytes, Optional[str]]:
    """Signed bytes plus the path they were written to, or None when the write failed"""
    pdf_bytes = pdf_sign_service.sign_pdf(
        _contract_pdf(db, record),
        signer_name=_signer_name(db, record),
        signing_id=str(record.id),
        signer_email=record.recipient_email,
    )
    path = contract_pdf_service.signed_contract_path(str(record.contract_id))
    try:
        with open(path, "wb") as f:
            f.write(pdf_bytes)
    except OSError as e:
        logger.error(f"[SIGNING] Could not write signed contract {path}: {e}")
        return pdf_bytes, None
    return pdf_bytes, path


# ==================== ADMIN ====================

@admin_router.post("/request", response_model=SigningRequestCreated)
def create_signing_request(request: SigningRequestCreate, db: Session = Depends(get_db)):
    """
    Create a pending signing request and email the signing link.

    expiration_days of 0 (or omitted) falls back to DEFAULT_SIGNING_EXPIRATION_DAYS.
    """
    try:
        contract_id = to_uuid(request.contract_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid contract ID")
    try:
        recipient_id = to_uuid(request.recipient_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid recipient ID")

    recipient = PersonRepository(db).get(recipient_id)
    if recipient is None:
        raise HTTPException(status_code=404, detail="Recipient not found")

    user = UserRepository(db).get_by_person_id(recipient_id)
    if user is None or not user.email:
        raise HTTPException(status_code=404, detail="Recipient email not found")

    expiration_days = request.expiration_days
    if expiration_days <= 0:
        expiration_days = settings.DEFAULT_SIGNING_EXPIRATION_DAYS

    signing = ContractSigningRepository(db)
    try:
        record = signing.create_request(
            contract_id,
            recipient_id,
            user.email,
            expiration_days,
            pdf_path=contract_pdf_service.contract_path(str(contract_id)),
        )
    except Exception as e:
        db.rollback()
        logger.error(f"[SIGNING] Failed to create signing request: {e}")
        raise HTTPException(status_code=500, detail="Failed to create signing request")

    signing_url = f"{settings.APP_BASE_URL}/sign/{record.id}"
    if not email_service.send_signing_request_email(user.email, recipient.full_name, signing_url, record.expires_at):
        logger.warning(f"[SIGNING] Signing email for request {record.id} could not be delivered")

    logger.info(f"[SIGNING] Request {record.id} created for contract {contract_id} -> {user.email}")
    return SigningRequestCreated(
        message="Signature request created and email sent",
        signing_id=str(record.id),
        expires_at=record.expires_at,
    )


# ==================== PUBLIC ====================

@router.get("/status/{signing_id}", response_model=SigningStatusResponse)
def get_signing_status(signing_id: UUID, db: Session = Depends(get_db)):
    record = _get_request(ContractSigningRepository(db), signing_id)
    return SigningStatusResponse(
        id=str(record.id),
        contract_id=str(record.contract_id),
        recipient_id=str(record.recipient_id),
        recipient_email=record.recipient_email,
        status=record.status.value,
        status_spanish=record.status_spanish,
        created_at=record.created_at,
        expires_at=record.expires_at,
        signed_at=record.signed_at,
        rejected_at=record.rejected_at,
    )


@router.post("/sign/{signing_id}", response_model=SignResponse)
def sign_contract(signing_id: UUID, db: Session = Depends(get_db)):
    """
    Sign the contract on behalf of the recipient.

    The status change is committed even when the PDF cannot be signed or the
    copy cannot be emailed; those failures are logged.
    """
    signing = ContractSigningRepository(db)
    record = _get_request(signing, signing_id)

    if record.status == SigningStatus.SIGNED:
        raise HTTPException(status_code=400, detail="Contract already signed")
    if record.status == SigningStatus.REJECTED:
        raise HTTPException(status_code=400, detail="Contract signing was rejected")
    if record.status == SigningStatus.EXPIRED:
        raise HTTPException(status_code=400, detail="Contract signing request has expired")

    signed_pdf = None
    signed_path = None
    try:
        signed_pdf, signed_path = _signed_pdf(db, record)
    except Exception as e:
        logger.error(f"[SIGNING] Could not produce signed PDF for request {record.id}: {e}")

    try:
        record = signing.mark_signed(record, signed_path)
    except Exception as e:
        db.rollback()
        logger.error(f"[SIGNING] Failed to mark request {record.id} as signed: {e}")
        raise HTTPException(status_code=500, detail="Failed to mark signing request as signed")

    if signed_pdf is not None:
        if not email_service.send_signed_contract_email(record.recipient_email, signed_pdf, record.signed_at):
            logger.error(f"[SIGNING] Signed copy for request {record.id} could not be emailed")

    logger.info(f"[SIGNING] Request {record.id} signed by {record.recipient_email}")
    return SignResponse(
        id=str(record.id),
        status=SigningStatus.SIGNED.value,
        signedAt=format_rfc3339(record.signed_at),
        signedBy=record.recipient_email,
        message="Contract successfully signed",
    )


@router.post("/reject/{signing_id}", response_model=RejectResponse)
def reject_contract(signing_id: UUID, db: Session = Depends(get_db)):
    signing = ContractSigningRepository(db)
    record = signing.get(signing_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Signing request not found")
    try:
        signing.mark_rejected(record)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"[SIGNING] Request {record.id} rejected")
    return RejectResponse(id=str(record.id), status=SigningStatus.REJECTED.value, message="Contract signing rejected")


@router.get("/pdf/{signing_id}")
def get_contract_pdf(signing_id: UUID, signed: bool = Query(False), db: Session = Depends(get_db)):
    """Serve the contract inline; ?signed=true returns the signed copy once signed"""
    record = _get_request(ContractSigningRepository(db), signing_id)

    try:
        if signed and record.status == SigningStatus.SIGNED:
            path = contract_pdf_service.signed_contract_path(str(record.contract_id))
            if os.path.exists(path):
                with open(path, "rb") as f:
                    pdf_bytes = f.read()
            else:
                pdf_bytes, _ = _signed_pdf(db, record)
        else:
            pdf_bytes = _contract_pdf(db, record)
    except Exception as e:
        logger.error(f"[SIGNING] Could not load PDF for request {record.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load contract PDF")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"inline; filename={record.contract_id}.pdf"},
    )
