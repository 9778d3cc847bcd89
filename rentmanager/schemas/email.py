from pydantic import BaseModel
from typing import Optional


class CustomEmailRequest(BaseModel):
    recipient_person_id: str
    subject: str
    body: str


class AnnualReminderRequest(BaseModel):
    optional_message: Optional[str] = ""
