"""Derived bus views.

A view forwards emissions, subscriptions and terminal signals to the bus
it was derived from. It keeps its own hook stores and registered events,
but those hooks never run: emission always terminates at the root bus,
which runs only its own hooks.
"""

from typing import Any, Callable, Optional

from hooter.core.bus.hooter import Hooter, Predicate
from hooter.core.logging import get_logger
from hooter.domain.entities.event import Event
from hooter.infrastructure.broadcast import Observer, Subscription, to_observer

logger = get_logger(__name__)


class DerivedHooter(Hooter):
    """Base class for views forwarding to a source bus."""

    def __init__(self, source: Hooter) -> None:
        super().__init__(
            source.sequencer.config,
            separator=source.separator,
            default_mode=source.default_mode,
        )
        self._source = source

    @property
    def source(self) -> Hooter:
        return self._source

    def subscribe(
        self,
        on_next: Any = None,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        return self._source.subscribe(on_next, on_error, on_complete)

    def error(self, err: BaseException) -> None:
        self._source.error(err)

    def complete(self) -> None:
        self._source.complete()

    def _dispatch(self, event: Event) -> Any:
        return self._source.next(event)


class PrefixedHooter(DerivedHooter):
    """View that namespaces every emitted event type.

    Example:
        billing = bus.prefix("billing")
        billing.toot("charged", 42)   # bus sees "billing.charged"
    """

    def __init__(self, source: Hooter, prefix: str) -> None:
        super().__init__(source)
        self._prefix = prefix
        logger.debug("Prefixed bus derived", prefix=prefix)

    @property
    def prefix_string(self) -> str:
        return self._prefix

    def _transform(self, event: Event) -> Event:
        if not self._prefix:
            return event
        return event.with_type(f"{self._prefix}{self.separator}{event.type}")


class FilteredHooter(DerivedHooter):
    """View whose subscribers only receive envelopes passing a predicate.

    Emissions through the view are forwarded unfiltered.
    """

    def __init__(self, source: Hooter, predicate: Predicate) -> None:
        super().__init__(source)
        self._predicate = predicate
        logger.debug("Filtered bus derived")

    @property
    def predicate(self) -> Predicate:
        return self._predicate

    def subscribe(
        self,
        on_next: Any = None,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        observer = to_observer(on_next, on_error, on_complete)
        deliver = observer.on_next
        predicate = self._predicate

        if deliver is not None:
            def filtered_next(event: Event) -> None:
                if predicate(event):
                    deliver(event)
        else:
            filtered_next = None

        return self._source.subscribe(
            Observer(filtered_next, observer.on_error, observer.on_complete)
        )
