"""Configuration module for switchyard.

Centralized configuration using pydantic-settings, loaded from
SWITCHYARD_-prefixed environment variables and .env files.

Usage:
    from switchyard.config import get_settings, configure_logging

    settings = get_settings()
    configure_logging(settings)
    print(settings.reporting.backend)
"""

from switchyard.config.settings import (
    # Main settings class
    SwitchyardSettings,
    # Nested settings classes
    RoutingSettings,
    ReportingSettings,
    SessionSettings,
    # Logging
    configure_logging,
    # Singleton functions
    get_settings,
    reload_settings,
    clear_settings_cache,
    # Constants
    DEFAULT_MAX_TREE_DEPTH,
    DEFAULT_REPORT_FILE,
    LOG_FORMAT,
)

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
