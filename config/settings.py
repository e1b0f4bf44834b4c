from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional
import os
from pathlib import Path


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""
    db_schema: str = "public"
    storage_bucket: str = "media"

    # Email
    email_provider: str = "resend"  # 'resend' or 'emailjs'
    resend_api_key: str = ""
    email_from: str = "team@theboardfc.com"
    emailjs_service_id: str = ""
    emailjs_template_id: str = ""
    emailjs_public_key: str = ""
    emailjs_private_key: Optional[str] = None

    # Club
    team_name: str = "The Board FC"

    # Web
    host: str = "0.0.0.0"
    port: int = 8080
    cookie_secret: str = ""
    session_timeout_minutes: int = 30

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('email_provider', mode='before')
    @classmethod
    def normalize_provider(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v in ("resend", "emailjs"):
                return v
        return "resend"

    @field_validator('session_timeout_minutes')
    @classmethod
    def positive_timeout(cls, v):
        if v < 1:
            raise ValueError("session_timeout_minutes must be at least 1")
        return v

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # SUPABASE_URL == supabase_url
    )


# Create settings instance
settings = Settings()

if os.getenv("DEBUG", "").lower() == "true":
    print(f"Settings loaded:")
    print(f"  SUPABASE_URL: {'set' if settings.supabase_url else 'MISSING'}")
    print(f"  SUPABASE_KEY: {'set' if settings.supabase_key else 'MISSING'}")
    print(f"  EMAIL_PROVIDER: {settings.email_provider}")
