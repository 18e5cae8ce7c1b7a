"""
Timeføring - Time Registration & Billing
Application Configuration
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Timeføring - Time Registration & Billing"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Demo data
    SEED_DEMO_DATA: bool = True

    # Billing
    HOURLY_RATE: int = 1500  # NOK
    CURRENCY: str = "NOK"
    PAYMENT_TERMS_DAYS: int = 30
    INVOICE_NUMBER_PREFIX: str = "F"
    FIRM_ID: str = "FIRM"

    # Hours input
    MIN_HOURS: float = 0.25
    MAX_HOURS: float = 24.0
    HOURS_STEP: float = 0.25
    DEFAULT_HOURS: float = 1.0

    # UI behaviour
    HIGHLIGHT_SECONDS: float = 3.0  # "recently added" marker lifetime

    # CORS Origins
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
