"""Configuration for the build reporter."""

from __future__ import annotations

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from the working directory tree, if one exists
load_dotenv(find_dotenv(".env", usecwd=True))


class ReporterSettings(BaseSettings):
    """Process-wide reporter configuration settings."""

    # Execution mode
    EXECUTING_COMMAND: str | None = Field(
        default=None,
        description="Name of the CLI command being executed (e.g. 'build', 'develop')",
    )

    # Output toggles
    VERBOSE: bool = False
    NO_COLOR: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="console", description="'console' or 'json'")
    SERVICE_NAME: str = "build-reporter"

    # Tracing
    TRACE_EXPORTER: str = Field(default="none", description="'none' or 'console'")

    model_config = SettingsConfigDict(
        env_prefix="REPORTER_",
        extra="ignore",
    )

    @property
    def is_build_mode(self) -> bool:
        return self.EXECUTING_COMMAND == "build"

