from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Server
    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    api_port: int = Field(default=8000, validation_alias="API_PORT")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(default="json", validation_alias="LOG_FORMAT")

    # CORS
    allowed_origins: str = Field(default="*", validation_alias="ALLOWED_ORIGINS")

    # Webhook
    webhook_url: str = Field(
        default="https://n8n.unitycompany.com.br/webhook/lp-fast-friday",
        validation_alias="WEBHOOK_URL",
    )
    webhook_timeout_seconds: Optional[float] = Field(default=None, validation_alias="WEBHOOK_TIMEOUT_SECONDS")

    # Form
    redirect_url: str = Field(default="redirect.html", validation_alias="REDIRECT_URL")
    form_id: str = Field(default="fast-friday-whatsapp-group", validation_alias="FORM_ID")
    form_version: str = Field(default="1.0", validation_alias="FORM_VERSION")
    form_source: str = Field(default="landing-page", validation_alias="FORM_SOURCE")
    phone_country_code: str = Field(default="55", validation_alias="PHONE_COUNTRY_CODE")

    @field_validator("environment")
    def validate_environment(cls, v):
        valid_envs = ["development", "testing", "staging", "production"]
        if v not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        valid_formats = ["json", "console"]
        if v not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v

    @field_validator("phone_country_code")
    def validate_phone_country_code(cls, v):
        if not v.isdigit() or len(v) != 2:
            raise ValueError("phone_country_code must be exactly 2 digits")
        return v

    @field_validator("webhook_timeout_seconds")
    def validate_webhook_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("webhook_timeout_seconds must be positive when set")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    def origins(self) -> List[str]:
        if self.allowed_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@dataclass(frozen=True)
class FormConfig:
    """Fixed configuration of one landing-page form integration."""

    webhook_url: str
    redirect_url: str = "redirect.html"
    form_id: str = "fast-friday-whatsapp-group"
    form_version: str = "1.0"
    source: str = "landing-page"
    country_code: str = "55"
    webhook_timeout_seconds: Optional[float] = None
    invalid_form_message: str = "Por favor, preencha todos os campos corretamente."

    @classmethod
    def from_settings(cls, settings: Settings) -> "FormConfig":
        return cls(
            webhook_url=settings.webhook_url,
            redirect_url=settings.redirect_url,
            form_id=settings.form_id,
            form_version=settings.form_version,
            source=settings.form_source,
            country_code=settings.phone_country_code,
            webhook_timeout_seconds=settings.webhook_timeout_seconds,
        )


settings = Settings()
