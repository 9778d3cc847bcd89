from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from rentmanager.schemas.common import FlexibleDatetime


class ContractGenerateRequest(BaseModel):
    """Input for the rental agreement PDF"""
    renter_id: str
    owner_id: str
    property_id: str
    cosigner_id: Optional[str] = ""
    witness_id: Optional[str] = ""
    start_date: FlexibleDatetime
    end_date: FlexibleDatetime
    contract_duration: Optional[str] = ""
    monthly_rent: float
    requires_deposit: bool = False
    deposit_amount: float = 0
    deposit_text: Optional[str] = ""
    additional_info: Optional[str] = ""


# ==================== Signing ====================

class SigningRequestCreate(BaseModel):
    contract_id: str
    recipient_id: str
    expiration_days: int = Field(default=0, ge=0)


class SigningRequestCreated(BaseModel):
    message: str
    signing_id: str
    expires_at: datetime


class SigningStatusResponse(BaseModel):
    id: str
    contract_id: str
    recipient_id: str
    recipient_email: str
    status: str
    status_spanish: str
    created_at: datetime
    expires_at: datetime
    signed_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None


class SignResponse(BaseModel):
    id: str
    status: str
    signedAt: str
    signedBy: str
    message: str


class RejectResponse(BaseModel):
    id: str
    status: str
    message: str
