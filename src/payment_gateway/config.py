"""Configuration management for the Payment Gateway."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BankSettings(BaseSettings):
    """Acquiring bank client settings."""

    base_url: str = Field(
        default="http://localhost:8080",
        description="Acquiring bank base URL"
    )
    timeout_seconds: float = Field(default=10.0, description="Transport timeout")


class ValidationSettings(BaseSettings):
    """Payment request validation settings."""

    min_expiry_year: int = Field(
        default=2024,
        description="Earliest card expiry year accepted"
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    service_name: str = Field(default="payment-gateway", description="Service name")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Authorization
    authorizer: str = Field(
        default="bank",
        description="Authorizer implementation (bank, mock)"
    )
    mock_latency_ms: int = Field(
        default=0,
        description="Simulated latency of the mock authorizer"
    )
    idempotency_key_locking: bool = Field(
        default=False,
        description="Serialize submissions that share an idempotency key"
    )

    # Acquiring bank
    bank: BankSettings = Field(default_factory=BankSettings)

    # Validation
    validation: ValidationSettings = Field(default_factory=ValidationSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
