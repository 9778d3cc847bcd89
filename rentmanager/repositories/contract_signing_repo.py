"""
Data access layer for contract signing requests.

Expiry is evaluated lazily: callers run expire_if_due() on every read of a
single request, and update_expired_statuses() is available for bulk reads.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from rentmanager.db.base import as_utc, utcnow
from rentmanager.models.contract_signing import ContractSigningRequest, SigningStatus
from rentmanager.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class ContractSigningRepository(BaseRepository[ContractSigningRequest]):
    model = ContractSigningRequest

    def create_request(self, contract_id, recipient_id, recipient_email: str,
                       expiration_days: int, pdf_path: Optional[str] = None) -> ContractSigningRequest:
        now = utcnow()
        return self.create({
            "contract_id": to_uuid(contract_id),
            "recipient_id": to_uuid(recipient_id),
            "recipient_email": recipient_email,
            "status": SigningStatus.PENDING,
            "created_at": now,
            "expires_at": now + timedelta(days=expiration_days),
            "pdf_path": pdf_path,
        })

    def get_by_contract_id(self, contract_id) -> List[ContractSigningRequest]:
        return (
            self.db.query(ContractSigningRequest)
            .filter(ContractSigningRequest.contract_id == to_uuid(contract_id))
            .order_by(ContractSigningRequest.created_at.desc())
            .all()
        )

    def get_by_recipient_id(self, recipient_id) -> List[ContractSigningRequest]:
        return (
            self.db.query(ContractSigningRequest)
            .filter(ContractSigningRequest.recipient_id == to_uuid(recipient_id))
            .order_by(ContractSigningRequest.created_at.desc())
            .all()
        )

    def get_pending(self) -> List[ContractSigningRequest]:
        return (
            self.db.query(ContractSigningRequest)
            .filter(ContractSigningRequest.status == SigningStatus.PENDING)
            .all()
        )

    def expire_if_due(self, request: ContractSigningRequest, now: Optional[datetime] = None) -> bool:
        """Move a pending request past its deadline to expired. Returns True if it changed."""
        now = now or utcnow()
        if request.status == SigningStatus.PENDING and as_utc(request.expires_at) < now:
            request.status = SigningStatus.EXPIRED
            self.db.commit()
            self.db.refresh(request)
            logger.info(f"[SIGNING] Request {request.id} expired")
            return True
        return False

    def update_expired_statuses(self, now: Optional[datetime] = None) -> int:
        """Expire every pending request whose deadline has passed."""
        now = now or utcnow()
        count = 0
        for request in self.get_pending():
            if as_utc(request.expires_at) < now:
                request.status = SigningStatus.EXPIRED
                count += 1
        if count:
            self.db.commit()
            logger.info(f"[SIGNING] Marked {count} request(s) as expired")
        return count

    def mark_signed(self, request: ContractSigningRequest, signed_pdf_path: Optional[str] = None) -> ContractSigningRequest:
        return self.update(request, {
            "status": SigningStatus.SIGNED,
            "signed_at": utcnow(),
            "signed_pdf_path": signed_pdf_path,
        })

    def mark_rejected(self, request: ContractSigningRequest) -> ContractSigningRequest:
        return self.update(request, {
            "status": SigningStatus.REJECTED,
            "rejected_at": utcnow(),
        })
