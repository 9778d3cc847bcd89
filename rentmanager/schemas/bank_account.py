from pydantic import BaseModel
from uuid import UUID
from typing import Optional


class BankAccountBase(BaseModel):
    bank_name: str
    account_type: Optional[str] = ""
    account_number: str
    account_holder: Optional[str] = ""


class BankAccountCreate(BankAccountBase):
    person_id: UUID


class BankAccountUpdate(BaseModel):
    # person_id is immutable after creation
    bank_name: Optional[str] = None
    account_type: Optional[str] = None
    account_number: Optional[str] = None
    account_holder: Optional[str] = None


class BankAccountResponse(BankAccountBase):
    id: UUID
    person_id: UUID

    class Config:
        from_attributes = True
