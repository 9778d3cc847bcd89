"""
Contract signing requests

Lifecycle: pending -> signed | rejected | expired.
Expiry is never swept; a pending request past expires_at is moved to
expired when it is read.
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import String, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
import uuid

from rentmanager.db.base import Base, utcnow


class SigningStatus(str, Enum):
    PENDING = "pending"
    SIGNED = "signed"
    REJECTED = "rejected"
    EXPIRED = "expired"


STATUS_SPANISH = {
    SigningStatus.PENDING: "Pendiente",
    SigningStatus.SIGNED: "Firmado",
    SigningStatus.REJECTED: "Rechazado",
    SigningStatus.EXPIRED: "Expirado",
}


class ContractSigningRequest(Base):
    __tablename__ = "contract_signatures"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contract_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    recipient_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    recipient_email: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[SigningStatus] = mapped_column(
        SQLEnum(SigningStatus, values_callable=lambda e: [m.value for m in e]),
        default=SigningStatus.PENDING,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    signed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    pdf_path: Mapped[str] = mapped_column(String(1024), nullable=True)
    signed_pdf_path: Mapped[str] = mapped_column(String(1024), nullable=True)

    @property
    def status_spanish(self) -> str:
        return STATUS_SPANISH.get(self.status, str(self.status))
