"""Application settings with Pydantic validation."""

from pathlib import Path
from typing import Any, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from loguru import logger
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clinic.constants import Timeouts, Windows


class ClinicSettings(BaseSettings):
    """Application settings with validation and environment variable support."""

    # Environment
    env: str = Field(
        default="production", description="Environment (production, development, testing)"
    )

    @model_validator(mode="before")
    @classmethod
    def default_env_for_pytest(cls, data: Any) -> Any:
        """Auto-detect testing environment when running under pytest."""
        import sys

        if not isinstance(data, dict):
            return data

        if ("env" not in data or not data.get("env")) and "pytest" in sys.modules:
            data["env"] = "testing"

        return data

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(default=True, description="Write JSON lines to the log file")

    # Clinic data backend (PostgREST-style REST API)
    api_base_url: str = Field(
        default="http://localhost:54321/rest/v1",
        description="Base URL of the clinic data REST API",
    )
    api_key: Optional[SecretStr] = Field(
        default=None, description="API key sent as 'apikey' and bearer token"
    )
    http_timeout: int = Field(
        default=Timeouts.HTTP_REQUEST_SECONDS, ge=1, le=300, description="HTTP timeout in seconds"
    )

    # Scheduling
    clinic_timezone: str = Field(default="Africa/Cairo", description="Clinic local timezone")
    availability_window_days: int = Field(
        default=Windows.AVAILABILITY_DAYS_DEFAULT,
        ge=1,
        le=Windows.AVAILABILITY_DAYS_MAX,
        description="How many days ahead weekly schedules are expanded",
    )
    revalidate_slot_on_submit: bool = Field(
        default=True, description="Reject slots whose date has passed at submit time"
    )

    # Clinic contact / WhatsApp hand-off
    clinic_name: str = Field(default="عيادات تعافي التخصصية", description="Clinic display name")
    clinic_phone: str = Field(default="01119007403", description="Clinic phone for enquiries")
    whatsapp_number: str = Field(
        default="201119007403", description="Clinic WhatsApp number in international format"
    )

    # Web
    session_ttl_seconds: int = Field(
        default=Windows.SESSION_TTL_SECONDS_DEFAULT,
        ge=60,
        description="Idle booking sessions expire after this many seconds",
    )
    cors_allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["production", "development", "testing", "staging"]
        if v.lower() not in allowed:
            raise ValueError(f'ENV must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("clinic_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone name against the IANA database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown CLINIC_TIMEZONE: {v}")
        return v

    @field_validator("whatsapp_number")
    @classmethod
    def validate_whatsapp_number(cls, v: str) -> str:
        """WhatsApp deep links take digits only, country code first."""
        digits = v.lstrip("+")
        if not digits.isdigit() or not 8 <= len(digits) <= 15:
            raise ValueError("WHATSAPP_NUMBER must be 8-15 digits in international format")
        return digits

    @property
    def tz(self) -> ZoneInfo:
        """Clinic timezone object."""
        return ZoneInfo(self.clinic_timezone)

    def get_cors_origins(self) -> List[str]:
        """Get CORS allowed origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env == "development"

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == "production"


# Singleton instance
_settings: Optional[ClinicSettings] = None


def get_settings() -> ClinicSettings:
    """
    Get application settings singleton.

    Returns:
        ClinicSettings instance

    Raises:
        ValidationError: If settings are invalid
    """
    global _settings
    if _settings is None:
        _settings = ClinicSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None


def load_env_variables(env_path: Optional[Path] = None) -> bool:
    """
    Export variables from the project's .env file into the process environment.

    Settings read .env on their own; this also exports the values to
    ``os.environ`` for uvicorn and aiohttp.

    Returns:
        True if a file was loaded
    """
    env_path = env_path or Path(__file__).resolve().parents[3] / ".env"
    if not env_path.exists():
        return False
    load_dotenv(env_path)
    logger.debug(f"Loaded environment variables from {env_path}")
    return True
