"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./tradebill.db"

    # Service
    service_name: str = "tradebill"
    log_level: str = "INFO"

    # Interest
    interest_policy: str = "annual_rate"  # annual_rate | fixed_daily
    default_interest_rate: float = 18.0  # Annual %, used when a bill carries no rate
    fixed_daily_rate: float = 0.0004765

    # Reminder templates, empty means the built-in wording
    reminder_no_rec_date_template: str = ""
    reminder_pending_interest_template: str = ""
    reminder_payment_thanks_template: str = ""

    # Cheque scanning (Gemini)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"

    # HTTP Client
    http_timeout_seconds: float = 30.0


settings = Settings()
