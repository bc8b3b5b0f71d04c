"""Application configuration."""
from datetime import date
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "HealFit Zone API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    db_auto_init: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 4000

    # Database
    database_url: str = "sqlite+aiosqlite:///./fitnessapp.db"
    database_echo: bool = False

    # JWT Authentication
    jwt_secret_key: str = "your-super-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_refresh_token_expire_days: int = 7

    # Passwords
    bcrypt_rounds: int = 12
    password_min_length: int = 6

    # Field encryption (Fernet key, urlsafe base64)
    field_encryption_key: Optional[str] = None

    # OTP
    otp_length: int = 6
    otp_ttl_seconds: int = 300
    otp_max_attempts: int = 5
    otp_resend_cooldown_seconds: int = 30
    otp_max_sends_per_window: int = 5
    otp_send_window_seconds: int = 3600
    otp_verified_window_seconds: int = 600
    otp_debug_echo: bool = True  # Return the code in the response (no SMS gateway)

    # Phone numbers
    default_country_code: str = "+91"

    # Plan cycles
    plan_cycle_anchor: date = date(2025, 1, 6)
    plan_cycle_days: int = 15

    # Gym location for clock in/out
    gym_latitude: float = 12.9716
    gym_longitude: float = 77.5946
    entry_radius_m: float = 100.0
    entry_geofence_enabled: bool = False

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
