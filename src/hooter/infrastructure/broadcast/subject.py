"""Multicast subject - delivers values to every active subscriber.

Subscribers are held in an ordered dict keyed by subscription id and
receive values in subscription order. A subscriber that raises is logged
and skipped; delivery continues with the next one.
"""

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Optional

from hooter.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Observer:
    """Callbacks for one subscription. Any of them may be None."""

    on_next: Optional[Callable[[Any], Any]] = None
    on_error: Optional[Callable[[BaseException], Any]] = None
    on_complete: Optional[Callable[[], Any]] = None


def to_observer(
    on_next: Any = None,
    on_error: Optional[Callable[[BaseException], Any]] = None,
    on_complete: Optional[Callable[[], Any]] = None,
) -> Observer:
    """Normalize subscribe() arguments into an Observer.

    Accepts an Observer, up to three callables, or any object exposing
    on_next / on_error / on_complete methods.
    """
    if isinstance(on_next, Observer):
        return on_next

    if on_next is None or callable(on_next):
        for name, value in (("on_error", on_error), ("on_complete", on_complete)):
            if value is not None and not callable(value):
                raise TypeError(f"An observer's {name} must be a function")
        return Observer(on_next, on_error, on_complete)

    if any(hasattr(on_next, name) for name in ("on_next", "on_error", "on_complete")):
        return Observer(
            getattr(on_next, "on_next", None),
            getattr(on_next, "on_error", None),
            getattr(on_next, "on_complete", None),
        )

    raise TypeError("A subscriber must be a function or an observer object")


class Subscription:
    """Disposable handle returned by subscribe().

    Example:
        with bus.subscribe(print):
            bus.toot("user.created")
    """

    def __init__(self, teardown: Optional[Callable[[], Any]] = None, closed: bool = False) -> None:
        self._teardown = teardown
        self._closed = closed

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        """Stop receiving values. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        if self._teardown is not None:
            self._teardown()
            self._teardown = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *args: Any) -> None:
        self.unsubscribe()


class Subject:
    """Hot multicast source with terminal error/complete signaling."""

    def __init__(self) -> None:
        self._observers: dict[int, Observer] = {}
        self._ids = itertools.count(1)
        self._stopped = False
        self._has_error = False
        self._error: Optional[BaseException] = None

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def subscribe(
        self,
        on_next: Any = None,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        on_complete: Optional[Callable[[], Any]] = None,
    ) -> Subscription:
        """Register an observer.

        A subscriber arriving after error() or complete() receives the
        terminal signal immediately and gets a closed subscription.
        """
        observer = to_observer(on_next, on_error, on_complete)

        if self._stopped:
            if self._has_error:
                if observer.on_error is not None:
                    observer.on_error(self._error)
            elif observer.on_complete is not None:
                observer.on_complete()
            return Subscription(closed=True)

        subscription_id = next(self._ids)
        self._observers[subscription_id] = observer
        return Subscription(lambda: self._observers.pop(subscription_id, None))

    def next(self, value: Any) -> None:
        """Deliver a value to every active observer."""
        if self._stopped:
            return

        for subscription_id, observer in list(self._observers.items()):
            if observer.on_next is None:
                continue
            try:
                observer.on_next(value)
            except Exception as e:
                logger.error(
                    "Subscriber failed",
                    subscription_id=subscription_id,
                    error=str(e),
                    exc_info=True,
                )

    def error(self, err: BaseException) -> None:
        """Signal an error to every observer and stop the subject."""
        if self._stopped:
            return
        self._stopped = True
        self._has_error = True
        self._error = err

        observers = list(self._observers.items())
        self._observers.clear()
        for subscription_id, observer in observers:
            if observer.on_error is None:
                continue
            try:
                observer.on_error(err)
            except Exception as e:
                logger.error(
                    "Subscriber failed on error",
                    subscription_id=subscription_id,
                    error=str(e),
                    exc_info=True,
                )

    def complete(self) -> None:
        """Signal completion to every observer and stop the subject."""
        if self._stopped:
            return
        self._stopped = True

        observers = list(self._observers.items())
        self._observers.clear()
        for subscription_id, observer in observers:
            if observer.on_complete is None:
                continue
            try:
                observer.on_complete()
            except Exception as e:
                logger.error(
                    "Subscriber failed on complete",
                    subscription_id=subscription_id,
                    error=str(e),
                    exc_info=True,
                )
