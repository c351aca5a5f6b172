"""Pydantic settings for switchyard.

This module defines the SwitchyardSettings class that loads configuration
from environment variables and .env files. It uses pydantic-settings for
automatic environment variable parsing and validation.

Settings Categories:
    - Core: Framework-level settings (debug mode, log level, environment)
    - Routing: Routing tree validation limits
    - Reporting: Which reporter stores request reports, and where
    - Sessions: In-memory session history limits

Environment Variables:
    SWITCHYARD_DEBUG: Enable debug mode (default: false)
    SWITCHYARD_LOG_LEVEL: Logging level (default: INFO)
    SWITCHYARD_ENVIRONMENT: Deployment environment (default: development)
    SWITCHYARD_ROUTING__VALIDATE_TREES: Validate trees on construction (default: true)
    SWITCHYARD_ROUTING__MAX_TREE_DEPTH: Maximum routing tree depth (default: 64)
    SWITCHYARD_REPORTING__BACKEND: null, memory or file (default: null)
    SWITCHYARD_REPORTING__REPORT_FILE: JSONL file for the file reporter
    SWITCHYARD_SESSIONS__MAX_HISTORY: Exchanges kept per session (default: 100)

Usage:
    from switchyard.config.settings import get_settings

    settings = get_settings()
    print(settings.debug)
    print(settings.reporting.backend)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Default Constants
# =============================================================================

DEFAULT_MAX_TREE_DEPTH = 64
"""Default maximum depth of a routing tree."""

DEFAULT_REPORT_FILE = "reports/reports.jsonl"
"""Default JSONL file used by the file reporter."""

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# Nested Settings Models
# =============================================================================


class RoutingSettings(BaseModel):
    """Settings for routing trees.

    Attributes:
        validate_trees: Whether TreeRouter validates its tree when built.
        max_tree_depth: Deepest decision path a valid tree may have.
    """

    validate_trees: bool = Field(
        default=True,
        description="Validate routing trees on construction"
    )
    max_tree_depth: int = Field(
        default=DEFAULT_MAX_TREE_DEPTH,
        ge=1,
        le=10000,
        description="Maximum routing tree depth"
    )


class ReportingSettings(BaseModel):
    """Settings for request reports.

    Attributes:
        backend: Reporter type ('null', 'memory', 'file').
        report_file: JSONL file written by the file reporter.
        lock_timeout: Seconds to wait for the report file lock.

    Reporter Types:
        - 'null': Reports are discarded (default).
        - 'memory': Reports are kept in process memory, for tests and demos.
        - 'file': Reports are appended to report_file, one JSON object
            per line, under a portalocker file lock.
    """

    backend: str = Field(
        default="null",
        description="Reporter type: 'null', 'memory' or 'file'"
    )
    report_file: Path = Field(
        default=Path(DEFAULT_REPORT_FILE),
        description="JSONL file for the file reporter"
    )
    lock_timeout: float = Field(
        default=10.0,
        gt=0.0,
        description="Seconds to wait for the report file lock"
    )

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate reporter backend type."""
        valid_backends = {"null", "memory", "file"}
        normalized = v.lower().strip()
        if normalized not in valid_backends:
            raise ValueError(
                f"Invalid reporting backend '{v}'. Must be one of: {', '.join(sorted(valid_backends))}"
            )
        return normalized

    @field_validator("report_file", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v


class SessionSettings(BaseModel):
    """Settings for the in-memory session service.

    Attributes:
        max_history: Exchanges kept per session; older ones are dropped.
    """

    max_history: int = Field(
        default=100,
        ge=1,
        description="Exchanges kept per session"
    )


# =============================================================================
# Main Settings Class
# =============================================================================


class SwitchyardSettings(BaseSettings):
    """Main settings class for switchyard configuration.

    Environment variables use the SWITCHYARD_ prefix; nested groups use
    ``__`` as delimiter (SWITCHYARD_REPORTING__BACKEND=file).

    Attributes:
        debug: Enable debug mode for verbose logging.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        environment: Deployment environment (development, staging, production, test).
        routing: Routing tree configuration.
        reporting: Reporter configuration.
        sessions: Session service configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="SWITCHYARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    # Core settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    environment: str = Field(
        default="development",
        description="Deployment environment"
    )

    # Nested configuration groups
    routing: RoutingSettings = Field(
        default_factory=RoutingSettings,
        description="Routing configuration"
    )
    reporting: ReportingSettings = Field(
        default_factory=ReportingSettings,
        description="Reporting configuration"
    )
    sessions: SessionSettings = Field(
        default_factory=SessionSettings,
        description="Session configuration"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(valid_levels))}"
            )
        return normalized

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment."""
        valid_envs = {"development", "staging", "production", "test"}
        normalized = v.lower()
        if normalized not in valid_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(sorted(valid_envs))}"
            )
        return normalized

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, else the configured level."""
        return "DEBUG" if self.debug else self.log_level

    def to_dict(self) -> dict[str, Any]:
        """Export settings as a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


# =============================================================================
# Logging
# =============================================================================


def configure_logging(settings: Optional[SwitchyardSettings] = None) -> None:
    """Configure root logging from settings.

    Applies the standard switchyard log format at the configured level.
    Safe to call more than once; later calls only adjust the level.

    Args:
        settings: Settings to read the level from. Uses get_settings() if omitted.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.effective_log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("switchyard").setLevel(level)


# =============================================================================
# Singleton Pattern
# =============================================================================

# Global settings instance cache
_settings_instance: Optional[SwitchyardSettings] = None


def get_settings() -> SwitchyardSettings:
    """Get the cached settings instance.

    The settings are created once and cached for subsequent calls to avoid
    repeated .env parsing and validation.

    Returns:
        The cached SwitchyardSettings instance.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = SwitchyardSettings()
    return _settings_instance


def reload_settings() -> SwitchyardSettings:
    """Reload settings from environment, clearing the cache.

    Returns:
        A fresh SwitchyardSettings instance.

    Example:
        ```python
        import os
        os.environ["SWITCHYARD_DEBUG"] = "true"
        settings = reload_settings()
        assert settings.debug is True
        ```
    """
    global _settings_instance
    _settings_instance = SwitchyardSettings()
    return _settings_instance


def clear_settings_cache() -> None:
    """Clear the settings cache without creating a new instance.

    Used in tests so that the next get_settings() call re-reads the
    environment.
    """
    global _settings_instance
    _settings_instance = None


__all__ = [
    "SwitchyardSettings",
    "RoutingSettings",
    "ReportingSettings",
    "SessionSettings",
    "configure_logging",
    "get_settings",
    "reload_settings",
    "clear_settings_cache",
    "DEFAULT_MAX_TREE_DEPTH",
    "DEFAULT_REPORT_FILE",
    "LOG_FORMAT",
]
