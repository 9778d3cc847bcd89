from pydantic import BaseModel
from uuid import UUID
from typing import Optional


class PersonBase(BaseModel):
    full_name: str
    phone: Optional[str] = ""
    nit: Optional[str] = ""


class PersonCreate(PersonBase):
    pass


class PersonUpdate(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    nit: Optional[str] = None


class PersonResponse(PersonBase):
    id: UUID

    class Config:
        from_attributes = True
