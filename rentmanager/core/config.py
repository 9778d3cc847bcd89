"""
Runtime settings for the rental backend.
Values come from the process environment, falling back to a local .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache
import os
import tempfile


class Settings(BaseSettings):
    """Every tunable of the service; field names match the env var names."""

    # ==================== Project Info ====================
    PROJECT_NAME: str = "RentManager API"
    PROJECT_DESCRIPTION: str = "Property rental management: persons, properties, rentals, payments and contracts"
    VERSION: str = "1.0.0"

    # ==================== Database ====================
    DATABASE_URL: str = "sqlite:///rentmanager_local.db"

    # ==================== Security & Authentication ====================
    SECRET_KEY: str = "your-super-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "rentManager"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    # ==================== CORS & Frontend ====================
    APP_BASE_URL: str = "http://localhost:5173"
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # ==================== Server Configuration ====================
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # ==================== Supabase Storage ====================
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_STORAGE_BUCKET: str = "uploads"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB

    # ==================== Telegram Backup ====================
    TELEGRAM_ENABLED: bool = False
    TELEGRAM_BOT_TOKEN: str = ""
    TELEGRAM_CHAT_ID: str = ""

    # ==================== Email Configuration ====================
    SMTP_SERVER: str = "smtp.protonmail.ch"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    EMAIL_FROM: str = "noreply@rentmanager.app"
    EMAIL_FROM_NAME: str = "Rental Management System"
    SEND_EMAILS: bool = True

    # ==================== Contracts & Signing ====================
    CONTRACTS_DIR: str = os.path.join(tempfile.gettempdir(), "contracts")
    CERTS_DIR: str = "./certs"
    TSA_URL: str = ""
    SIGNATURE_LOCATION: str = "Digital Signature"
    DEFAULT_SIGNING_EXPIRATION_DAYS: int = 7

    # ==================== Reminders ====================
    REMINDER_TIMEZONE: str = "America/New_York"
    DEFAULT_SENDER_NAME: str = "La Administración"

    # ==================== Features ====================
    DEBUG: bool = False
    TESTING: bool = False
    LOG_LEVEL: str = "INFO"

    # ==================== Loading ====================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        # deployment envs carry unrelated variables
        extra="allow",
    )

    # ==================== Properties ====================
    @property
    def email_configured(self) -> bool:
        """SMTP delivery is enabled and has credentials"""
        return bool(self.SEND_EMAILS and self.SMTP_SERVER and self.SMTP_USER and self.SMTP_PASSWORD)

    @property
    def storage_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_KEY)

    @property
    def telegram_configured(self) -> bool:
        return bool(self.TELEGRAM_BOT_TOKEN and self.TELEGRAM_CHAT_ID)

    @property
    def certificate_path(self) -> str:
        return os.path.join(self.CERTS_DIR, "certificate.crt")

    @property
    def private_key_path(self) -> str:
        return os.path.join(self.CERTS_DIR, "private.key")


# ==================== Cached instance ====================
@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process"""
    return Settings()


settings = get_settings()


# ==================== Helpers ====================
def get_cors_origins() -> List[str]:
    """Origins passed to CORSMiddleware"""
    return settings.ALLOWED_ORIGINS


def is_testing() -> bool:
    """True under the test suite; startup then skips table creation"""
    return settings.TESTING
