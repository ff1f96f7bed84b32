"""Configuration settings for log capture sessions."""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class CaptureSettings(BaseSettings):
    """Capture settings loaded from ``LOG_CAPTURE_*`` environment variables."""

    # Level for the library's own structlog setup
    log_level: str = Field(default="INFO")

    # Render JSON lines from setup_logging instead of console output
    json_logs: bool = Field(default=True)

    # Threshold installed on the logger while a session is open. Kept above
    # zero so stdlib loggers do not inherit their parent's effective level.
    capture_min_level: int = Field(default=1, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is a known level name.

        Raises:
            ValueError: If the level name is not registered with logging
        """
        from .severity import resolve_level
        from .exceptions import UnknownLevelError

        try:
            resolve_level(v)
        except UnknownLevelError as e:
            raise ValueError(str(e)) from e
        return v.upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LOG_CAPTURE_",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> CaptureSettings:
    """Get capture settings instance."""
    return CaptureSettings()


# Create a global settings instance lazily
settings: CaptureSettings | None = None


def get_global_settings() -> CaptureSettings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
