from pydantic import BaseModel
from uuid import UUID
from typing import Optional, List


class PricingBase(BaseModel):
    # Range checks happen in the route so the error messages stay explicit
    rental_id: Optional[UUID] = None
    monthly_rent: float = 0
    security_deposit: float = 0
    utilities_included: List[str] = []
    tenant_responsible_for: List[str] = []
    late_fee: float = 0
    due_day: int = 1


class PricingCreate(PricingBase):
    pass


class PricingUpdate(PricingBase):
    pass


class PricingResponse(PricingBase):
    id: UUID
    rental_id: UUID

    class Config:
        from_attributes = True
