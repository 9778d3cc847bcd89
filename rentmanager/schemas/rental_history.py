from pydantic import BaseModel
from uuid import UUID
from datetime import datetime
from typing import Optional

from rentmanager.schemas.common import FlexibleDatetime


class RentalHistoryCreate(BaseModel):
    person_id: UUID
    rental_id: UUID
    status: str
    end_reason: Optional[str] = ""
    end_date: Optional[FlexibleDatetime] = None


class RentalHistoryUpdate(BaseModel):
    person_id: Optional[UUID] = None
    rental_id: Optional[UUID] = None
    status: Optional[str] = None
    end_reason: Optional[str] = None
    end_date: Optional[FlexibleDatetime] = None


class RentalHistoryResponse(BaseModel):
    id: UUID
    person_id: UUID
    rental_id: UUID
    status: str
    end_reason: Optional[str] = ""
    end_date: Optional[datetime] = None

    class Config:
        from_attributes = True
