"""Exceptions raised by the bus.

Shape errors (a non-string event type, a non-callable hook and so on) are
raised as the builtin TypeError. Everything else derives from HooterError.
"""


class HooterError(Exception):
    """Base class for all bus errors."""
    pass


class InvalidModeError(HooterError, ValueError):
    """Raised when a mode is not one of the recognized modes."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(
            f'An event mode must be either "auto", "asIs", "sync" or "async", got {mode!r}'
        )


class ModeOverrideError(HooterError):
    """Raised when a registered event is tooted with a custom mode."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            f'Event "{event_type}" is a registered event and shouldn\'t be tooted with a custom mode'
        )


class EventRegistrationError(HooterError):
    """Raised when an event type cannot be registered."""
    pass
