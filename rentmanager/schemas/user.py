from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from typing import Optional

from rentmanager.models.user import UserRole, UserStatus


class UserLogin(BaseModel):
    email: str
    password: str


class UserBase(BaseModel):
    email: EmailStr
    role: UserRole = UserRole.USER
    person_id: Optional[UUID] = None
    status: UserStatus = UserStatus.PENDING


class UserCreate(UserBase):
    # Base64 form sent by the frontend; plain text is encoded server side
    password_base64: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    person_id: Optional[UUID] = None
    status: Optional[UserStatus] = None
    password_base64: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: UUID
    email: str
    role: UserRole
    person_id: Optional[UUID] = None
    status: UserStatus

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    success: bool = True
    user: UserResponse
    token: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)
