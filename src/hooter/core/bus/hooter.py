"""Hooter - the event bus core.

A Hooter broadcasts every emitted event ("toot") to its subscribers and
runs the hooks whose patterns match the event type. Hooks live in three
phase stores and always run before -> main -> after:

    bus = Hooter()
    bus.hook_start("user.*", validate)     # before phase
    bus.hook("user.created", persist)      # main phase
    bus.hook_end(audit)                    # after phase, matches everything
    bus.toot_sync("user.created", {"id": 1})

Hooks are called as ``fn(event, *args)`` where ``event`` is the Event
envelope. The execution mode of the combined hook list is chosen per
emission, or fixed up front with register().
"""

import functools
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from hooter.core.exceptions import EventRegistrationError, InvalidModeError
from hooter.core.hooks.hook_decorator import HookDecorator
from hooter.core.hooks.hook_store import HookStore
from hooter.core.hooks.matching import DEFAULT_SEPARATOR, GLOBSTAR
from hooter.core.hooks.matching import match as match_pattern
from hooter.core.logging import get_logger
from hooter.core.modes import Mode, is_valid_mode, resolve_mode
from hooter.domain.entities.event import Event, RegisteredEvent
from hooter.infrastructure.broadcast import Subject, Subscription
from hooter.infrastructure.sequencing import Sequencer, SequencerConfig

if TYPE_CHECKING:
    from hooter.core.bus.views import FilteredHooter, PrefixedHooter

logger = get_logger(__name__)

Predicate = Callable[[Event], bool]


class Hooter:
    """Typed, prefixable event bus with phased wildcard hooks.

    Attributes:
        separator: Segment separator used for pattern matching and prefixes.
        default_mode: Mode for unregistered events tooted without one.
        sequencer: Runs the invocation list of each emission.
        hook_store_before: Hooks of the before phase.
        hook_store: Hooks of the main phase.
        hook_store_after: Hooks of the after phase (last registered runs first).
    """

    def __init__(
        self,
        config: Union[SequencerConfig, Mapping[str, Any], None] = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
        default_mode: str = Mode.AUTO,
    ) -> None:
        """Initialize the bus.

        Args:
            config: Sequencer configuration, forwarded to Sequencer as is.
            separator: Single-character segment separator.
            default_mode: Mode for unregistered events tooted without one.
        """
        if not isinstance(separator, str) or len(separator) != 1:
            raise TypeError("A separator must be a single character")

        if not is_valid_mode(default_mode):
            raise InvalidModeError(default_mode)

        self.separator = separator
        self.default_mode = default_mode
        self.sequencer = Sequencer(config)
        self.hook_store_before = HookStore(self.match)
        self.hook_store = HookStore(self.match)
        self.hook_store_after = HookStore(self.match, reverse=True)
        self._subject = Subject()
        self._events: dict[str, RegisteredEvent] = {}

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def source(self) -> Optional["Hooter"]:
        """The bus this one forwards to, or None for a root bus."""
        return None

    @property
    def root(self) -> "Hooter":
        """The bus at the end of the derivation chain."""
        bus = self
        while bus.source is not None:
            bus = bus.source
        return bus

    @property
    def events(self) -> Mapping[str, RegisteredEvent]:
        """Read-only view of registered events keyed by event type."""
        return MappingProxyType(self._events)

    @property
    def hooks(self) -> HookDecorator:
        """Decorator API: ``@bus.hooks.on("user.*")``."""
        return HookDecorator(self)

    def get_registered_event(self, event_type: str) -> Optional[RegisteredEvent]:
        return self._events.get(event_type)

    def match(self, event_type: str, pattern: str) -> bool:
        """Check whether a concrete event type matches a pattern."""
        return match_pattern(event_type, pattern, self.separator)

    # =========================================================================
    # Subscription
    # =========================================================================

    def subscribe(
        self,
        on_next: Any = None,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        """Receive every envelope emitted on this bus."""
        return self._subject.subscribe(on_next, on_error, on_complete)

    def error(self, err: BaseException) -> None:
        self._subject.error(err)

    def complete(self) -> None:
        self._subject.complete()

    # =========================================================================
    # Hooks
    # =========================================================================

    def _hook(self, event_type: Any, hook: Optional[Callable], store: HookStore) -> str:
        if hook is None:
            if isinstance(event_type, str):
                raise TypeError("A hook must be a function")
            hook, event_type = event_type, GLOBSTAR
        elif not isinstance(event_type, str):
            raise TypeError("An event type must be a string")

        if not callable(hook):
            raise TypeError("A hook must be a function")

        return store.put(event_type, hook)

    def hook(self, event_type: Any, hook: Optional[Callable] = None) -> str:
        """Register a main-phase hook.

        Accepts ``hook(fn)`` (matches every event) or ``hook(pattern, fn)``.

        Returns:
            Handle for unhook().
        """
        return self._hook(event_type, hook, self.hook_store)

    def hook_start(self, event_type: Any, hook: Optional[Callable] = None) -> str:
        """Register a before-phase hook."""
        return self._hook(event_type, hook, self.hook_store_before)

    def hook_end(self, event_type: Any, hook: Optional[Callable] = None) -> str:
        """Register an after-phase hook."""
        return self._hook(event_type, hook, self.hook_store_after)

    def unhook(self, hook_id: str) -> None:
        """Remove a hook from every phase. Unknown handles are ignored."""
        self.hook_store_before.delete(hook_id)
        self.hook_store.delete(hook_id)
        self.hook_store_after.delete(hook_id)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def next(self, event: Union[Event, Mapping[str, Any]]) -> Any:
        """Emit an envelope.

        Accepts an Event or a mapping with type/mode/args/cb keys.

        Returns:
            Whatever the sequencer returns: a plain value, a coroutine, or
            None when no hook matched.

        Raises:
            TypeError: If the envelope is malformed.
            InvalidModeError: If the envelope's mode is not recognized.
        """
        event = self._transform(Event.coerce(event))
        return self._dispatch(event)

    def _transform(self, event: Event) -> Event:
        return event

    def _dispatch(self, event: Event) -> Any:
        self._subject.next(event)

        hooks = (
            self.hook_store_before.get(event.type)
            + self.hook_store.get(event.type)
            + self.hook_store_after.get(event.type)
        )
        handlers: list[Callable[..., Any]] = [functools.partial(h.fn, event) for h in hooks]

        if event.cb is not None:
            handlers.append(event.cb)

        if not handlers:
            logger.debug("No hooks matched", event_type=event.type)
            return None

        logger.debug(
            "Running hooks",
            event_type=event.type,
            mode=event.mode,
            handler_count=len(handlers),
        )

        return self.sequencer.run(event.mode, handlers, event.args)

    def _toot(
        self,
        event_type: str,
        mode: Optional[str],
        args: tuple,
        cb: Optional[Callable[..., Any]] = None,
    ) -> Any:
        registered = self._events.get(event_type) if isinstance(event_type, str) else None
        mode = resolve_mode(
            event_type,
            mode,
            registered.mode if registered else None,
            self.default_mode,
        )
        return self.next(Event(event_type, mode, args, cb))

    def toot(self, event_type: str, *args: Any) -> Any:
        return self._toot(event_type, None, args)

    def toot_auto(self, event_type: str, *args: Any) -> Any:
        return self._toot(event_type, Mode.AUTO, args)

    def toot_as_is(self, event_type: str, *args: Any) -> Any:
        return self._toot(event_type, Mode.AS_IS, args)

    def toot_sync(self, event_type: str, *args: Any) -> Any:
        return self._toot(event_type, Mode.SYNC, args)

    def toot_async(self, event_type: str, *args: Any) -> Any:
        return self._toot(event_type, Mode.ASYNC, args)

    def toot_with(self, event_type: str, cb: Callable[..., Any], *args: Any) -> Any:
        return self._toot(event_type, None, args, cb)

    def toot_auto_with(self, event_type: str, cb: Callable[..., Any], *args: Any) -> Any:
        return self._toot(event_type, Mode.AUTO, args, cb)

    def toot_as_is_with(self, event_type: str, cb: Callable[..., Any], *args: Any) -> Any:
        return self._toot(event_type, Mode.AS_IS, args, cb)

    def toot_sync_with(self, event_type: str, cb: Callable[..., Any], *args: Any) -> Any:
        return self._toot(event_type, Mode.SYNC, args, cb)

    def toot_async_with(self, event_type: str, cb: Callable[..., Any], *args: Any) -> Any:
        return self._toot(event_type, Mode.ASYNC, args, cb)

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, event_type: str, mode: str) -> RegisteredEvent:
        """Bind an event type to a fixed mode.

        Emissions of a registered type always use that mode; tooting it
        with an explicit mode raises ModeOverrideError.

        Raises:
            EventRegistrationError: If the type is empty or already registered.
            InvalidModeError: If the mode is not recognized.
        """
        if not isinstance(event_type, str) or not event_type:
            raise EventRegistrationError("An event type must be a non-empty string")

        if event_type in self._events:
            raise EventRegistrationError(f'Event "{event_type}" is already registered')

        if not is_valid_mode(mode):
            raise InvalidModeError(mode)

        registered = RegisteredEvent(event_type=event_type, mode=mode)
        self._events[event_type] = registered

        logger.debug("Event registered", event_type=event_type, mode=mode)

        return registered

    # =========================================================================
    # Derivation
    # =========================================================================

    def prefix(self, prefix: str) -> "PrefixedHooter":
        """Derive a bus that prepends ``prefix + separator`` to emitted types."""
        from hooter.core.bus.views import PrefixedHooter

        if not isinstance(prefix, str):
            raise TypeError("A prefix must be a string")

        return PrefixedHooter(self, prefix)

    def filter(self, predicate: Union[Predicate, str]) -> "FilteredHooter":
        """Derive a bus whose subscribers only see matching envelopes.

        Args:
            predicate: Callable over the envelope, or a wildcard pattern
                       matched against the event type.
        """
        from hooter.core.bus.views import FilteredHooter

        if isinstance(predicate, str):
            pattern = predicate
            predicate = lambda e: self.match(e.type, pattern)  # noqa: E731
        elif not callable(predicate):
            raise TypeError("A predicate must be a function or a pattern string")

        return FilteredHooter(self, predicate)
