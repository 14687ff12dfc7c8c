"""Hooter - typed, prefixable event bus with phased wildcard hooks."""

__version__ = "0.1.0"

import logging

from hooter.core.bus import FilteredHooter, Hooter, PrefixedHooter
from hooter.core.exceptions import (
    EventRegistrationError,
    HooterError,
    InvalidModeError,
    ModeOverrideError,
)
from hooter.core.modes import MODES, Mode
from hooter.domain.entities import Event, RegisteredEvent
from hooter.infrastructure.broadcast import Subscription
from hooter.infrastructure.sequencing import Sequencer, SequencerConfig

logging.getLogger("hooter").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Hooter",
    "PrefixedHooter",
    "FilteredHooter",
    "Event",
    "RegisteredEvent",
    "Mode",
    "MODES",
    "Sequencer",
    "SequencerConfig",
    "Subscription",
    "HooterError",
    "InvalidModeError",
    "ModeOverrideError",
    "EventRegistrationError",
]
