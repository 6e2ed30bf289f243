"""
Configuration management for the phonology toolkit.

This module provides centralized configuration using Pydantic settings
with support for environment variables and .env files.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidationResult(BaseModel):
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []


class PhonologySettings(BaseSettings):
    """Phonology toolkit configuration settings."""

    # Application
    app_name: str = "phonology"
    app_version: str = "0.1.0"

    # Diagnostics
    diagnostics_enabled: bool = Field(default=True, description="Emit diagnostics for rejected definitions and failed operations")

    # Default resources
    default_features_path: str | None = Field(default=None, description="Override for the bundled default feature definitions")

    # Logging settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_structured: bool = Field(default=False, description="Emit JSON structured log records")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file="config/.env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PHONOLOGY_",
        extra="ignore",
    )

    def get_default_features_path(self) -> Path | None:
        """Get the default feature definition override as a Path object."""
        if self.default_features_path:
            return Path(self.default_features_path).expanduser().resolve()
        return None

    def get_log_file_path(self) -> Path | None:
        """Get log file path as Path object."""
        if not self.log_file:
            return None
        path = Path(self.log_file).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def validate_settings(self) -> ValidationResult:
        """Validate settings and return status information."""
        status = ValidationResult()

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            status.errors.append(f"Unknown log level: {self.log_level}")
            status.valid = False

        features_path = self.get_default_features_path()
        if features_path and not features_path.is_file():
            status.errors.append(f"Default features file does not exist: {features_path}")
            status.valid = False

        if not self.diagnostics_enabled:
            status.warnings.append("Diagnostics are disabled; rejected definitions will be skipped silently")

        return status


# Global settings instance
settings = PhonologySettings()


def get_settings() -> PhonologySettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> PhonologySettings:
    """Reload settings from environment and return new instance."""
    global settings
    settings = PhonologySettings()
    return settings
