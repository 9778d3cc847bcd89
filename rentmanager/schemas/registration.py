from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from uuid import UUID

from rentmanager.schemas.common import FlexibleDatetime


class ManagerRegistrationRequest(BaseModel):
    """Self sign-up of a manager together with their first property"""
    # Person
    full_name: str
    phone: str
    nit: Optional[str] = ""
    email: EmailStr
    password: str = Field(..., min_length=8)

    # Property
    property_address: str
    property_apt_number: Optional[str] = ""
    property_city: str
    property_state: str
    property_zip_code: Optional[str] = ""
    property_type: str

    # Bank account
    bank_name: str
    account_type: str
    account_number: str
    account_holder: str

    # Pricing
    monthly_rent: float
    security_deposit: float
    utilities_included: List[str] = []
    tenant_responsible_for: List[str] = []
    late_fee: float = 0
    due_day: int = Field(..., ge=1, le=31)

    # Rental
    start_date: Optional[FlexibleDatetime] = None
    end_date: Optional[FlexibleDatetime] = None
    payment_terms: Optional[str] = ""


class ManagerRegistrationResponse(BaseModel):
    success: bool = True
    user_id: UUID
    person_id: UUID
    property_id: UUID
    message: str
