from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional

from rentmanager.schemas.common import FlexibleDatetime


class RentPaymentCreate(BaseModel):
    rental_id: UUID
    payment_date: FlexibleDatetime
    amount_paid: float
    paid_on_time: bool = True


class RentPaymentUpdate(BaseModel):
    rental_id: Optional[UUID] = None
    payment_date: Optional[FlexibleDatetime] = None
    amount_paid: Optional[float] = None
    paid_on_time: Optional[bool] = None


class RentPaymentResponse(BaseModel):
    id: UUID
    rental_id: UUID
    payment_date: datetime
    amount_paid: float
    paid_on_time: bool

    class Config:
        from_attributes = True
