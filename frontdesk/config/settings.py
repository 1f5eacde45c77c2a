"""
Environment configuration for the front desk service.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from decimal import Decimal
from typing import List, Optional
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

# Booking rate snapshots are stored as Numeric(6, 4)
RATE_DECIMAL_PLACES = 4

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application configuration
    APP_NAME: str = "Front Desk"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Comma separated or JSON list, see get_cors_origins()
    CORS_ORIGINS: str = "*"

    # Database configuration
    DATABASE_URL: str = "sqlite:///./frontdesk.db"
    DATABASE_ECHO: bool = False
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    AUTO_CREATE_TABLES: bool = True

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # Billing
    CURRENCY: str = "KES"
    BOOKING_TAX_RATE: Optional[Decimal] = None
    BOOKING_SERVICE_CHARGE_RATE: Optional[Decimal] = None
    INVOICE_TAX_RATE: Decimal = Field(default=Decimal("0.16"))

    # Business logic
    AUTO_HOUSEKEEPING_ON_CHECKOUT: bool = True
    DEFAULT_HOUSEKEEPER: str = "unassigned"
    ENFORCE_BOOKING_OVERLAP: bool = False

    @field_validator('BOOKING_TAX_RATE', 'BOOKING_SERVICE_CHARGE_RATE', mode='before')
    @classmethod
    def empty_rate_is_none(cls, v):
        """Treat an empty env value as 'no rate'"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('BOOKING_TAX_RATE', 'BOOKING_SERVICE_CHARGE_RATE', 'INVOICE_TAX_RATE')
    @classmethod
    def validate_rate_precision(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is None:
            return v
        if v < 0:
            raise ValueError("rates must be zero or positive")
        if v != v.quantize(Decimal(1).scaleb(-RATE_DECIMAL_PLACES)):
            raise ValueError(f"rates allow at most {RATE_DECIMAL_PLACES} decimal places")
        return v

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from string to list"""
        value = self.CORS_ORIGINS.strip()
        # Handle JSON string format from .env
        if value.startswith('[') and value.endswith(']'):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
