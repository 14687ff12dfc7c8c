"""Event envelope and registered event records.

Contains the data structures that travel through the bus:
- Event: one emission (a "toot"), immutable once created
- RegisteredEvent: an event type pre-bound to a fixed mode
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from hooter.core.exceptions import InvalidModeError
from hooter.core.modes import is_valid_mode


@dataclass(frozen=True)
class Event:
    """Envelope describing one emission.

    Hooks receive the envelope as their first argument, followed by
    the emission's positional arguments.

    Attributes:
        type: Concrete event type, e.g. "user.created".
        mode: One of "auto", "asIs", "sync" or "async".
        args: Positional arguments passed to every hook.
        cb: Optional completion callback, run after all hooks.

    Example:
        event = Event("user.created", "sync", ({"id": 1},))
        prefixed = event.with_type("accounts.user.created")
    """

    type: str
    mode: str
    args: tuple = ()
    cb: Optional[Callable[..., Any]] = None

    def __post_init__(self) -> None:
        """Validate envelope shape."""
        if not isinstance(self.type, str):
            raise TypeError("An event type must be a string")

        if not is_valid_mode(self.mode):
            raise InvalidModeError(self.mode)

        if self.cb is not None and not callable(self.cb):
            raise TypeError("An event callback must be a function")

        if isinstance(self.args, (str, bytes, bytearray)) or not isinstance(self.args, Sequence):
            raise TypeError("Event args must be a sequence of values")

        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    def with_type(self, event_type: str) -> "Event":
        """Return a shallow copy with a different type."""
        return replace(self, type=event_type)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Event":
        """Build an envelope from a mapping with type/mode/args/cb keys."""
        return cls(
            type=data.get("type"),
            mode=data.get("mode"),
            args=data.get("args") or (),
            cb=data.get("cb"),
        )

    @classmethod
    def coerce(cls, value: Any) -> "Event":
        """Accept an Event or a mapping, reject anything else.

        Raises:
            TypeError: If the value is neither an Event nor a mapping.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise TypeError("An event must be an object")


@dataclass(frozen=True)
class RegisteredEvent:
    """An event type bound to a fixed mode.

    Attributes:
        event_type: The registered event type.
        mode: The mode every emission of this type runs with.
    """

    event_type: str
    mode: str
