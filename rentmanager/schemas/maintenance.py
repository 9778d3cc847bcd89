from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional

from rentmanager.models.maintenance import MaintenanceStatus
from rentmanager.schemas.common import FlexibleDatetime


class MaintenanceRequestCreate(BaseModel):
    property_id: Optional[UUID] = None
    renter_id: Optional[UUID] = None
    description: Optional[str] = None
    request_date: Optional[FlexibleDatetime] = None
    status: Optional[MaintenanceStatus] = None


class MaintenanceRequestUpdate(BaseModel):
    property_id: Optional[UUID] = None
    renter_id: Optional[UUID] = None
    description: Optional[str] = None
    request_date: Optional[FlexibleDatetime] = None
    status: Optional[MaintenanceStatus] = None


class MaintenanceRequestResponse(BaseModel):
    id: UUID
    property_id: UUID
    renter_id: Optional[UUID] = None
    description: str
    request_date: datetime
    status: MaintenanceStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
