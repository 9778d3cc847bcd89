from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional

from rentmanager.schemas.common import FlexibleDatetime


class RentalBase(BaseModel):
    property_id: UUID
    renter_id: UUID
    bank_account_id: Optional[UUID] = None
    start_date: Optional[FlexibleDatetime] = None
    end_date: Optional[FlexibleDatetime] = None
    payment_terms: Optional[str] = ""
    unpaid_months: int = 0


class RentalCreate(RentalBase):
    pass


class RentalUpdate(BaseModel):
    property_id: Optional[UUID] = None
    renter_id: Optional[UUID] = None
    bank_account_id: Optional[UUID] = None
    start_date: Optional[FlexibleDatetime] = None
    end_date: Optional[FlexibleDatetime] = None
    payment_terms: Optional[str] = None
    unpaid_months: Optional[int] = None


class RentalResponse(BaseModel):
    id: UUID
    property_id: UUID
    renter_id: UUID
    bank_account_id: Optional[UUID] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    payment_terms: Optional[str] = ""
    unpaid_months: int = 0

    class Config:
        from_attributes = True
