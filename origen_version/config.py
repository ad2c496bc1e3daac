# ============================================================
# SPDX-License-Identifier: GPL-3.0-or-later
# This program is part of the Origen version service project.
# Copyright (C) 2026  The Origen version service authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# ============================================================
"""Configuration module for the Origen version service.

This module provides Pydantic-based settings validation for the environment
variables read by the service. Every setting has a default, so the service
boots with no environment at all; invalid values fail fast.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Origen version service configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    origen_environment: Literal["dev", "prod"] = Field(
        default="dev",
        description="Environment mode reported by the health endpoint.",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the service.",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format. Use 'json' for production, 'console' for development.",
    )

    # Service configuration
    service_host: str = Field(
        default="0.0.0.0",
        description="Host to bind the service to.",
    )
    service_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to bind the service to.",
    )

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode."""
        return self.origen_environment == "prod"

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.origen_environment == "dev"

    def get_redacted_config_dict(self) -> dict[str, str]:
        """Return a dictionary of configuration suitable for logging.

        Returns:
            A dictionary with every value rendered as a string.
        """
        return {
            "origen_environment": self.origen_environment,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "service_host": self.service_host,
            "service_port": str(self.service_port),
        }


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    pass


# Keyed by settings field name, in the order they are reported
FIELD_ERROR_MESSAGES: dict[str, str] = {
    "origen_environment": "ORIGEN_ENVIRONMENT must be either 'dev' or 'prod'.",
    "log_level": "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR or CRITICAL.",
    "log_format": "LOG_FORMAT must be either 'json' or 'console'.",
    "service_port": "SERVICE_PORT must be an integer between 1 and 65535.",
}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once per process. Validation failures are
    re-raised as ConfigurationError naming the offending variable.

    Returns:
        Settings: The validated settings instance.

    Raises:
        ConfigurationError: If an environment variable holds an invalid value.
    """
    try:
        return Settings()
    except ValidationError as e:
        invalid_fields = {str(loc) for error in e.errors() for loc in error["loc"]}
        for field, message in FIELD_ERROR_MESSAGES.items():
            if field in invalid_fields:
                raise ConfigurationError(message) from e
        raise ConfigurationError(f"Configuration error: {e}") from e
