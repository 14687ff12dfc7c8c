import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from hooter import Hooter, InvalidModeError
from hooter.core.config import HooterSettings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    settings = HooterSettings()

    assert settings.environment == "development"
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "HOOTER_ENVIRONMENT": "production",
        "HOOTER_LOG_LEVEL": "DEBUG",
    }):
        settings = HooterSettings()

        assert settings.is_production is True
        assert settings.log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        HooterSettings(log_level="LOUD")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_bus_ignores_environment_for_matching_and_mode():
    """Test that separator and default mode only come from constructor arguments."""
    with patch.dict(os.environ, {"HOOTER_SEPARATOR": "/", "HOOTER_DEFAULT_MODE": "sync"}):
        get_settings.cache_clear()
        bus = Hooter()

    assert bus.separator == "."
    assert bus.default_mode == "auto"
    assert bus.match("user.created", "user.*") is True


def test_bus_arguments_set_separator_and_mode():
    bus = Hooter(separator=":", default_mode="async")

    assert bus.separator == ":"
    assert bus.default_mode == "async"


def test_bus_rejects_invalid_separator_and_mode():
    with pytest.raises(TypeError, match="separator"):
        Hooter(separator="::")

    with pytest.raises(InvalidModeError):
        Hooter(default_mode="later")
