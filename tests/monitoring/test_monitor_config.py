"""Tests for monitor configuration."""

from __future__ import annotations

import os
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from optionrisk.monitoring import MonitorConfig


class TestMonitorConfig:
    """Tests for MonitorConfig."""

    def test_defaults(self) -> None:
        """Test default configuration."""
        config = MonitorConfig()

        assert config.default_threshold == 0.1
        assert config.delta_movement_sensitivity == 0.05
        assert config.cooldown_seconds == 300.0
        assert config.adaptive_factor == 0.1
        assert config.adaptive_cap == 0.3
        assert config.store_write_attempts == 3
        assert config.reprice_from_parameters is False
        assert config.idle_eviction_seconds is None

    def test_frozen(self) -> None:
        """Test configuration is immutable."""
        config = MonitorConfig()
        with pytest.raises(FrozenInstanceError):
            config.cooldown_seconds = 1.0  # type: ignore[misc]

    def test_from_env(self) -> None:
        """Test values are read from OPTIONRISK_* variables."""
        env = {
            "OPTIONRISK_DEFAULT_THRESHOLD": "0.25",
            "OPTIONRISK_COOLDOWN_SECONDS": "60",
            "OPTIONRISK_STORE_WRITE_ATTEMPTS": "5",
            "OPTIONRISK_REPRICE_FROM_PARAMETERS": "true",
            "OPTIONRISK_IDLE_EVICTION_SECONDS": "3600",
        }
        with patch.dict(os.environ, env):
            config = MonitorConfig.from_env()

        assert config.default_threshold == 0.25
        assert config.cooldown_seconds == 60.0
        assert config.store_write_attempts == 5
        assert config.reprice_from_parameters is True
        assert config.idle_eviction_seconds == 3600.0
        assert config.delta_movement_sensitivity == 0.05

    def test_from_env_empty_and_none(self) -> None:
        """Test empty variables keep defaults and 'none' disables eviction."""
        env = {
            "OPTIONRISK_DEFAULT_THRESHOLD": "",
            "OPTIONRISK_IDLE_EVICTION_SECONDS": "None",
            "OPTIONRISK_REPRICE_FROM_PARAMETERS": "no",
        }
        with patch.dict(os.environ, env):
            config = MonitorConfig.from_env()

        assert config.default_threshold == 0.1
        assert config.idle_eviction_seconds is None
        assert config.reprice_from_parameters is False

    def test_from_env_custom_prefix(self) -> None:
        """Test a custom variable prefix."""
        with patch.dict(os.environ, {"DESK_COOLDOWN_SECONDS": "5"}):
            config = MonitorConfig.from_env(prefix="DESK_")

        assert config.cooldown_seconds == 5.0

    def test_from_env_invalid_number(self) -> None:
        """Test malformed numbers are rejected."""
        with patch.dict(os.environ, {"OPTIONRISK_COOLDOWN_SECONDS": "soon"}):
            with pytest.raises(ValueError):
                MonitorConfig.from_env()
