from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional


class UploadToken(BaseModel):
    """Upload link token kept in process memory"""
    token: str
    email: str
    name: str
    user_id: str
    person_id: Optional[str] = ""
    created_at: datetime
    expires_at: datetime
    used: bool = False
    created_by: str


class GenerateLinkRequest(BaseModel):
    recipient_email: EmailStr
    recipient_name: str
    user_id: str
    expiration_days: int = Field(default=7, ge=0)


class GenerateLinkResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    expires_at: datetime
    upload_link: str


class FileInfo(BaseModel):
    name: str
    size: int = 0
    path: str
    mime_type: Optional[str] = ""
    uploaded_at: Optional[str] = None
    download_url: Optional[str] = ""


class UploadResponse(BaseModel):
    success: bool = True
    key: str
    link: str
    name: str
    path: str
    size: int
    uploaded_by: str
    uploaded_at: str
    bucket_name: str
