"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote score-record API
    score_api_base: str = "http://localhost:3000"
    score_records_path: str = "/api/risk-scores"

    # Credential store key holding the bearer token
    credential_key: str = "token"

    # Assistant view handoff
    assistant_path: str = "/ai-assistant"

    # Service
    service_name: str = "riskscore-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Success indicator auto-dismiss delay
    success_notice_seconds: float = 3.0


settings = Settings()
