from pydantic import BaseModel
from uuid import UUID
from typing import Optional, List


class PropertyBase(BaseModel):
    address: str
    apt_number: Optional[str] = ""
    city: Optional[str] = ""
    state: Optional[str] = ""
    zip_code: Optional[str] = ""
    type: Optional[str] = ""
    resident_id: Optional[UUID] = None
    manager_ids: List[UUID] = []


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    address: Optional[str] = None
    apt_number: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    type: Optional[str] = None
    resident_id: Optional[UUID] = None
    manager_ids: Optional[List[UUID]] = None


class PropertyResponse(PropertyBase):
    id: UUID

    class Config:
        from_attributes = True
