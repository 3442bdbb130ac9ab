"""outdated-report settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OutputFormat(StrEnum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """Defaults for the CLI, overridden by its options."""

    model_config = SettingsConfigDict(
        env_prefix="OUTDATED_REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Log level used unless --verbose is given.",
    )
    dotnet_binary: str = Field(
        default="dotnet",
        description="dotnet executable used to run dotnet-outdated.",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.TABLE,
        description="Output format used unless --format is given.",
    )


def get_settings() -> Settings:
    return Settings()
