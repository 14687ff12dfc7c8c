"""Core Hooter utilities.

This module exports configuration, logging and error types for use
throughout the library.
"""

from hooter.core.config import HooterSettings, get_settings
from hooter.core.exceptions import (
    EventRegistrationError,
    HooterError,
    InvalidModeError,
    ModeOverrideError,
)
from hooter.core.logging import bound_context, configure_logging, get_logger
from hooter.core.modes import MODES, Mode, is_valid_mode, resolve_mode

__all__ = [
    "HooterSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bound_context",
    "HooterError",
    "InvalidModeError",
    "ModeOverrideError",
    "EventRegistrationError",
    "MODES",
    "Mode",
    "is_valid_mode",
    "resolve_mode",
]
