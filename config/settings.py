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

    # Web server
    host: str = "0.0.0.0"
    port: int = 8080
    public_base_url: str = "http://localhost:8080"
    admin_token: str = ""
    # Read the client IP from X-Forwarded-For (only behind a reverse proxy)
    trust_proxy: bool = False

    # Event
    event_name: str = "II Toma Caminera"
    organizer_name: str = "Caroltur"
    whatsapp_number: str = "573216215749"
    landing_whatsapp_number: str = "573128762526"
    landing_price: int = 90000
    meta_pixel_id: Optional[str] = None

    # App Settings
    default_language: str = "es"

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('default_language', mode='before')
    @classmethod
    def parse_language(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("es", "en"):
            return v.strip().lower()
        return "es"

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
    print("Settings loaded:")
    print(f"  SUPABASE_URL: {'set' if settings.supabase_url else 'MISSING'}")
    print(f"  ADMIN_TOKEN: {'set' if settings.admin_token else 'MISSING'}")
