from rentmanager.services import email_service
from rentmanager.services import contract_pdf_service
from rentmanager.services import pdf_sign_service
from rentmanager.services import reminder_service
from rentmanager.services import storage_service
from rentmanager.services import upload_tokens

__all__ = [
    "email_service",
    "contract_pdf_service",
    "pdf_sign_service",
    "reminder_service",
    "storage_service",
    "upload_tokens",
]
