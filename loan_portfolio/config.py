"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./loan_portfolio.db"
    create_tables: bool = True  # Create schema on startup (no migrations yet)

    # Service
    service_name: str = "loan-portfolio"
    log_level: str = "INFO"

    # Payment status simulation: fixed seed makes generated paid dates reproducible
    payment_seed: Optional[int] = None

    # Share of disposable income that may go to a loan payment (36% rule)
    affordability_debt_ratio: float = 0.36


settings = Settings()
