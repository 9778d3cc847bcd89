from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator

from rentmanager.core.dates import parse_flexible_datetime

# Accepts RFC 3339 or plain YYYY-MM-DD (and a few other layouts)
FlexibleDatetime = Annotated[datetime, BeforeValidator(parse_flexible_datetime)]


class MessageResponse(BaseModel):
    message: str


class RentalIdsRequest(BaseModel):
    rental_ids: List[UUID] = []


class PropertyIdsRequest(BaseModel):
    property_ids: List[UUID] = []


class ErrorResponse(BaseModel):
    detail: str
    success: Optional[bool] = None
