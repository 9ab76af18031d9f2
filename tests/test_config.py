"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from dep_ensure.config import Settings, get_settings, print_settings_json


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.dep_path == "dep"
        assert settings.working_dir is None
        assert settings.build_timeout is None
        assert settings.log_level == "INFO"

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "DEP_ENSURE_DEP_PATH": "/usr/local/bin/dep",
                "DEP_ENSURE_LOG_LEVEL": "DEBUG",
                "DEP_ENSURE_BUILD_TIMEOUT": "900",
                "DEP_ENSURE_WORKING_DIR": "/workspace",
            },
        ):
            settings = Settings()
            assert settings.dep_path == "/usr/local/bin/dep"
            assert settings.log_level == "DEBUG"
            assert settings.build_timeout == 900
            assert settings.working_dir == Path("/workspace")

    def test_build_timeout_minimum(self) -> None:
        """Build timeout below a minute should be rejected."""
        with patch.dict(os.environ, {"DEP_ENSURE_BUILD_TIMEOUT": "5"}):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    """Test get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        assert isinstance(get_settings(), Settings)


class TestPrintSettingsJson:
    """Test print_settings_json function."""

    def test_print_settings_json(self) -> None:
        """print_settings_json should return valid JSON."""
        parsed = json.loads(print_settings_json(Settings()))

        assert "dep_path" in parsed
        assert "working_dir" in parsed
        assert "build_timeout" in parsed
        assert "log_level" in parsed

    def test_print_settings_json_default(self) -> None:
        """print_settings_json without args should use default settings."""
        parsed = json.loads(print_settings_json())
        assert "dep_path" in parsed
