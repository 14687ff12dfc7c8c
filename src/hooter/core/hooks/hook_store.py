"""Hook store - ordered collection of (pattern, hook) registrations.

A bus owns three stores, one per phase (before, main, after). Each store
answers "which hooks match this concrete event type" in its configured
order: insertion order, or reverse insertion order for the after phase so
the last registered teardown hook runs first.
"""

import uuid
from dataclasses import dataclass
from typing import Callable

from hooter.core.hooks.matching import DEFAULT_SEPARATOR, match
from hooter.core.logging import get_logger

logger = get_logger(__name__)

Matcher = Callable[[str, str], bool]


@dataclass(frozen=True)
class RegisteredHook:
    """Internal representation of a registered hook.

    Attributes:
        id: Unique identifier for this hook registration.
        pattern: Wildcard pattern the hook is registered for.
        fn: The callable to invoke.
    """

    id: str
    pattern: str
    fn: Callable


class HookStore:
    """Ordered collection of hooks with wildcard lookup.

    Example:
        store = HookStore()
        hook_id = store.put("user.*", on_user_event)
        store.get("user.created")   # [RegisteredHook(..., pattern="user.*")]
        store.delete(hook_id)
    """

    def __init__(self, matcher: Matcher | None = None, reverse: bool = False) -> None:
        """Initialize the store.

        Args:
            matcher: Function (event_type, pattern) -> bool. Defaults to
                     segment-wildcard matching on ".".
            reverse: If True, get() returns hooks in reverse insertion order.
        """
        self._matcher = matcher or (lambda a, b: match(a, b, DEFAULT_SEPARATOR))
        self._reverse = reverse
        # Insertion-ordered; get() relies on it for FIFO results
        self._hooks: dict[str, RegisteredHook] = {}

    @property
    def reverse(self) -> bool:
        return self._reverse

    def put(self, pattern: str, fn: Callable) -> str:
        """Add a hook and return its handle.

        Args:
            pattern: Non-empty wildcard pattern.
            fn: Hook callable.

        Returns:
            Unique hook_id string for later removal.

        Raises:
            TypeError: If pattern is not a non-empty string or fn is not callable.
        """
        if not isinstance(pattern, str) or not pattern:
            raise TypeError("A hook pattern must be a non-empty string")

        if not callable(fn):
            raise TypeError("A hook must be a function")

        hook_id = f"hook_{uuid.uuid4().hex[:12]}"

        self._hooks[hook_id] = RegisteredHook(id=hook_id, pattern=pattern, fn=fn)

        logger.debug("Hook stored", hook_id=hook_id, pattern=pattern, reverse=self._reverse)

        return hook_id

    def get(self, event_type: str) -> list[RegisteredHook]:
        """Return every hook whose pattern matches the event type.

        The returned list is a snapshot; later put/delete calls do not
        affect it.
        """
        matching = [
            hook for hook in self._hooks.values() if self._matcher(event_type, hook.pattern)
        ]
        if self._reverse:
            matching.reverse()
        return matching

    def delete(self, hook_id: str) -> bool:
        """Remove a hook by its handle.

        Returns:
            True if the hook was removed, False if it was not present.
        """
        hook = self._hooks.pop(hook_id, None)
        if hook is None:
            return False

        logger.debug("Hook deleted", hook_id=hook_id, pattern=hook.pattern)
        return True

    def clear(self) -> int:
        """Remove all hooks and return how many were removed."""
        count = len(self._hooks)
        self._hooks.clear()
        return count

    def __len__(self) -> int:
        return len(self._hooks)

    def __contains__(self, hook_id: object) -> bool:
        return hook_id in self._hooks
