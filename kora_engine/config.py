"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "kora-engine"
    log_level: str = "INFO"

    # Danger zone: few days left and a thin daily allowance
    danger_zone_max_days: int = 7
    danger_zone_safe_spend_threshold: float = 5000

    # Local-hour windows, [start, end)
    weekend_warning_start_hour: int = 17
    weekend_warning_end_hour: int = 20
    payday_checkin_start_hour: int = 8
    payday_checkin_end_hour: int = 12

    weekend_max_days: int = 3  # Fri-Sun


settings = Settings()
