from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID


class ManagerInvitationRequest(BaseModel):
    email: EmailStr
    name: str
    message: Optional[str] = ""
    temp_password: Optional[str] = Field(default="", alias="tempPassword")
    status: Optional[str] = "newuser"

    model_config = {"populate_by_name": True}


class ManagerInvitationResponse(BaseModel):
    success: bool = True
    message: str
    email: str
    person_id: UUID
    user_id: UUID
    temp_password: str
