"""Configuration management for Payment Callback Service."""

from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from payment_callback.processors.classifier import DEFAULT_SUCCESS_STATUSES, STATUS_AUTHORISED
from payment_callback.processors.configuration import BrandOption, parse_brands, parse_locale_map
from payment_callback.processors.signature import HashAlgorithm


class GatewaySettings(BaseSettings):
    """Off-site gateway settings (SHA-OUT, status codes, hosted page options)."""

    sha_out: str = Field(default="", description="SHA-OUT passphrase shared with the processor")
    sha_algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.SHA1,
        description="Digest algorithm used for SHA-OUT (sha1, sha256, sha512)",
    )
    log_response: bool = Field(
        default=False,
        description="Log the raw feedback of every callback (signature included)",
    )

    authorized_status: str = Field(
        default=STATUS_AUTHORISED,
        description="Status code meaning authorised, not yet captured",
    )
    success_statuses: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: sorted(DEFAULT_SUCCESS_STATUSES),
        description="Status codes treated as a successful payment",
    )

    # Hosted payment page options
    language_from_ui: bool = Field(default=False, description="Show hosted page in site language")
    language_from_ui_map: Annotated[dict[str, str], NoDecode] = Field(
        default_factory=dict,
        description="Website locale to processor locale map (source|target lines)",
    )
    enable_brands: bool = Field(default=False, description="Let the buyer pick a brand on site")
    brands: Annotated[list[BrandOption], NoDecode] = Field(
        default_factory=list,
        description="Selectable brands (title|PM|BRAND lines)",
    )

    @field_validator("success_statuses", mode="before")
    @classmethod
    def _split_statuses(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [status.strip() for status in value.split(",") if status.strip()]
        return value

    @field_validator("language_from_ui_map", mode="before")
    @classmethod
    def _parse_locale_map(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_locale_map(value)
        return value

    @field_validator("brands", mode="before")
    @classmethod
    def _parse_brands(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_brands(value)
        return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    service_name: str = Field(default="payment-callback-service", description="Service name")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    # Gateway
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
