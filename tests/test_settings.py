"""Tests for switchyard settings.

Test Coverage:
- Default values without env vars
- Environment variable overrides, including nested groups
- Invalid settings raise validation errors
- Singleton pattern behavior
- Logging configuration
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from switchyard.config import (
    DEFAULT_MAX_TREE_DEPTH,
    DEFAULT_REPORT_FILE,
    ReportingSettings,
    RoutingSettings,
    SwitchyardSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
    reload_settings,
)


# =============================================================================
# Defaults
# =============================================================================


class TestDefaults:
    """Tests for default settings values."""

    def test_core_defaults(self):
        settings = SwitchyardSettings()
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.environment == "development"

    def test_nested_defaults(self):
        settings = SwitchyardSettings()
        assert settings.routing.validate_trees is True
        assert settings.routing.max_tree_depth == DEFAULT_MAX_TREE_DEPTH
        assert settings.reporting.backend == "null"
        assert settings.reporting.report_file == Path(DEFAULT_REPORT_FILE)
        assert settings.sessions.max_history == 100

    def test_to_dict(self):
        data = SwitchyardSettings().to_dict()
        assert data["reporting"]["backend"] == "null"
        assert data["routing"]["max_tree_depth"] == DEFAULT_MAX_TREE_DEPTH


# =============================================================================
# Environment Overrides
# =============================================================================


class TestEnvironment:
    """Tests for environment variable overrides."""

    def test_core_overrides(self, monkeypatch):
        monkeypatch.setenv("SWITCHYARD_DEBUG", "true")
        monkeypatch.setenv("SWITCHYARD_LOG_LEVEL", "warning")
        monkeypatch.setenv("SWITCHYARD_ENVIRONMENT", "PRODUCTION")
        settings = SwitchyardSettings()
        assert settings.debug is True
        assert settings.log_level == "WARNING"
        assert settings.environment == "production"

    def test_nested_overrides(self, monkeypatch):
        monkeypatch.setenv("SWITCHYARD_REPORTING__BACKEND", "file")
        monkeypatch.setenv("SWITCHYARD_REPORTING__REPORT_FILE", "out/r.jsonl")
        monkeypatch.setenv("SWITCHYARD_ROUTING__MAX_TREE_DEPTH", "8")
        settings = SwitchyardSettings()
        assert settings.reporting.backend == "file"
        assert settings.reporting.report_file == Path("out/r.jsonl")
        assert settings.routing.max_tree_depth == 8

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("SWITCHYARD_SESSIONS__MAX_HISTORY=7\n")
        assert SwitchyardSettings().sessions.max_history == 7


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    """Tests for invalid settings."""

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SwitchyardSettings(log_level="LOUD")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            SwitchyardSettings(environment="moon")

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            ReportingSettings(backend="carrier-pigeon")

    def test_backend_is_normalized(self):
        assert ReportingSettings(backend=" Memory ").backend == "memory"

    @pytest.mark.parametrize("depth", [0, -1, 10001])
    def test_invalid_tree_depth(self, depth):
        with pytest.raises(ValidationError):
            RoutingSettings(max_tree_depth=depth)

    def test_invalid_lock_timeout(self):
        with pytest.raises(ValidationError):
            ReportingSettings(lock_timeout=0)


# =============================================================================
# Singleton and Logging
# =============================================================================


class TestSingleton:
    """Tests for the settings cache."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reload_reads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SWITCHYARD_DEBUG", "true")
        assert get_settings().debug is False
        reloaded = reload_settings()
        assert reloaded is not first
        assert reloaded.debug is True
        assert get_settings() is reloaded

    def test_clear_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first


class TestLogging:
    """Tests for logging configuration."""

    def test_effective_log_level(self):
        assert SwitchyardSettings(log_level="ERROR").effective_log_level == "ERROR"
        assert SwitchyardSettings(debug=True, log_level="ERROR").effective_log_level == "DEBUG"

    def test_configure_logging_sets_package_level(self):
        logger = logging.getLogger("switchyard")
        previous = logger.level
        try:
            configure_logging(SwitchyardSettings(log_level="WARNING"))
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(previous)
