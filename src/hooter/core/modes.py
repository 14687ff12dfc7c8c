"""Execution mode definitions.

A mode is the execution discipline applied to the combined hook list of one
emission. Modes are plain strings and are case-sensitive.
"""

from typing import Optional

from hooter.core.exceptions import ModeOverrideError


class Mode:
    """Recognized execution modes.

    - AUTO: the sequencer decides per hook, switching to async as soon as a
      hook returns an awaitable
    - AS_IS: hooks are called and the result is passed through uncoerced
    - SYNC: hooks are called sequentially and awaitables are never awaited
    - ASYNC: each hook's result is awaited before the next hook runs
    """

    AUTO = "auto"
    AS_IS = "asIs"
    SYNC = "sync"
    ASYNC = "async"


MODES: tuple[str, ...] = (Mode.AUTO, Mode.AS_IS, Mode.SYNC, Mode.ASYNC)


def is_valid_mode(mode: object) -> bool:
    """Check if a value is one of the recognized modes."""
    return isinstance(mode, str) and mode in MODES


def resolve_mode(
    event_type: str,
    mode: Optional[str],
    registered_mode: Optional[str] = None,
    default_mode: str = Mode.AUTO,
) -> str:
    """Determine the mode an emission runs with.

    Args:
        event_type: The emitted event type, used in error messages.
        mode: The mode supplied by the caller, or None.
        registered_mode: The fixed mode of a registered event, if any.
        default_mode: Fallback for unregistered events tooted without a mode.

    Returns:
        The mode to put on the envelope. Unregistered modes are returned
        unvalidated; the envelope rejects unknown ones.

    Raises:
        ModeOverrideError: If the event is registered and a mode was supplied.
    """
    if registered_mode is not None:
        if mode:
            raise ModeOverrideError(event_type)
        return registered_mode

    return mode or default_mode
