"""
Unit tests for environment configuration
"""
import os
from unittest.mock import patch

from src.config import DEFAULT_PORT, Settings, load_settings


class TestLoadSettings:
    """Test load_settings"""

    def test_defaults(self):
        """Test defaults with an empty environment"""
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        assert settings == Settings()
        assert settings.port == DEFAULT_PORT
        assert settings.allow_override is False
        assert settings.debug is False

    def test_reads_environment(self):
        """Test every variable is read from the environment"""
        env = {
            "PORT": "8080",
            "HOST": "127.0.0.1",
            "ALLOW_OVERRIDE": "true",
            "PYTHON_ENV": "development",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        assert settings.port == 8080
        assert settings.host == "127.0.0.1"
        assert settings.allow_override is True
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_override_requires_literal_true(self):
        """Test ALLOW_OVERRIDE only accepts "true" """
        with patch.dict(os.environ, {"ALLOW_OVERRIDE": "yes"}, clear=True):
            assert load_settings().allow_override is False

    def test_invalid_port_falls_back(self, caplog):
        """Test a non-numeric PORT falls back with a warning"""
        with patch.dict(os.environ, {"PORT": "not-a-port"}, clear=True):
            settings = load_settings()
        assert settings.port == DEFAULT_PORT
        assert "Invalid PORT value" in caplog.text

    def test_out_of_range_port_falls_back(self):
        """Test an out-of-range PORT falls back to the default"""
        with patch.dict(os.environ, {"PORT": "70000"}, clear=True):
            assert load_settings().port == DEFAULT_PORT

    def test_invalid_log_level_falls_back(self):
        """Test an unknown LOG_LEVEL falls back to INFO"""
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}, clear=True):
            assert load_settings().log_level == "INFO"
