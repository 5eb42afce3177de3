"""Application configuration using Pydantic Settings."""

from typing import Optional, Literal
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ZONES = [
    "America/Santiago",
    "America/New_York",
    "America/Argentina/Buenos_Aires",
    "America/Bogota",
    "America/Santo_Domingo",
]


class ConversionSettings(BaseSettings):
    """Time conversion configuration."""

    supported_zones: list[str] = Field(default=list(DEFAULT_ZONES), description="Supported IANA zones, in display order")
    default_source_zone: str = Field(default="America/Santiago", description="Source zone when none is given")
    resolution_strategy: Literal["anchor", "fixed_point"] = Field(
        default="fixed_point",
        description=(
            "How a civil time is resolved to an instant: fixed_point re-samples the offset "
            "until it settles; anchor reproduces the legacy single-lookup output"
        ),
    )
    max_iterations: int = Field(default=4, description="Max fixed point iterations")

    model_config = SettingsConfigDict(env_prefix="CONVERSION_")

    @field_validator("supported_zones")
    @classmethod
    def validate_supported_zones(cls, v):
        """Validate the zone list."""
        if not v:
            raise ValueError("At least one supported zone is required")
        if len(set(v)) != len(v):
            raise ValueError("Supported zones must be unique")
        return v

    @field_validator("max_iterations")
    @classmethod
    def validate_max_iterations(cls, v):
        """Validate iteration bound."""
        if not 1 <= v <= 10:
            raise ValueError("max_iterations must be between 1 and 10")
        return v

    @model_validator(mode="after")
    def validate_default_source_zone(self):
        """The default source must be one of the supported zones."""
        if self.default_source_zone not in self.supported_zones:
            raise ValueError(f"Default source zone {self.default_source_zone} is not supported")
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(asctime)s [%(levelname)s] %(name)s: %(message)s", description="Log format")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(env_prefix="LOG_")


class CORSSettings(BaseSettings):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], description="Allowed origins")
    allow_credentials: bool = Field(default=False, description="Allow credentials")
    allow_methods: list[str] = Field(default=["GET"], description="Allowed methods")
    allow_headers: list[str] = Field(default=["*"], description="Allowed headers")

    model_config = SettingsConfigDict(env_prefix="CORS_")


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration."""

    enabled: bool = Field(default=True, description="Enable rate limiting")
    default: str = Field(default="120/minute", description="Default limit per client address")

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_")


class ServerSettings(BaseSettings):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of workers")
    allowed_hosts: list[str] = Field(default=["*"], description="Trusted Host header values")

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class Settings(BaseSettings):
    """Main application settings."""

    # Application info
    app_name: str = Field(default="City Time Converter", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    app_description: str = Field(
        default="Converts a wall-clock time between a fixed set of American timezones",
        description="Application description",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Debug mode")

    # Nested settings
    conversion: ConversionSettings = Field(default_factory=ConversionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    # Convenience properties
    @property
    def host(self) -> str:
        """Get server host."""
        return self.server.host

    @property
    def port(self) -> int:
        """Get server port."""
        return self.server.port

    @field_validator("debug")
    @classmethod
    def validate_debug(cls, v, info):
        """Validate debug mode."""
        if info.data.get("environment") == "production" and v:
            raise ValueError("Debug mode cannot be enabled in production")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
