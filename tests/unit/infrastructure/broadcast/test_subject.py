"""Unit tests for the multicast Subject."""

from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from hooter.infrastructure.broadcast import Observer, Subject, Subscription


class TestSubscribe:
    """Tests for Subject.subscribe()."""

    def test_delivers_in_subscription_order(self) -> None:
        subject = Subject()
        received = []

        subject.subscribe(lambda v: received.append(("first", v)))
        subject.subscribe(lambda v: received.append(("second", v)))
        subject.next(1)

        assert received == [("first", 1), ("second", 1)]

    def test_unsubscribe_stops_delivery(self) -> None:
        subject = Subject()
        on_next = MagicMock()

        subscription = subject.subscribe(on_next)
        subscription.unsubscribe()
        subscription.unsubscribe()
        subject.next(1)

        on_next.assert_not_called()
        assert subscription.closed is True
        assert subject.observer_count == 0

    def test_subscription_as_context_manager(self) -> None:
        subject = Subject()
        on_next = MagicMock()

        with subject.subscribe(on_next) as subscription:
            subject.next("inside")

        subject.next("outside")

        on_next.assert_called_once_with("inside")
        assert isinstance(subscription, Subscription)
        assert subscription.closed is True

    def test_observer_object_is_accepted(self) -> None:
        class Collector:
            def __init__(self):
                self.values = []
                self.completed = False

            def on_next(self, value):
                self.values.append(value)

            def on_complete(self):
                self.completed = True

        subject = Subject()
        collector = Collector()
        subject.subscribe(collector)
        subject.next("a")
        subject.complete()

        assert collector.values == ["a"]
        assert collector.completed is True

    def test_invalid_subscriber_rejected(self) -> None:
        with pytest.raises(TypeError):
            Subject().subscribe(42)

        with pytest.raises(TypeError):
            Subject().subscribe(print, on_error="nope")


class TestNext:
    """Tests for Subject.next()."""

    def test_failing_observer_does_not_block_others(self) -> None:
        subject = Subject()
        received = []

        def broken(value):
            raise RuntimeError("subscriber bug")

        subject.subscribe(broken)
        subject.subscribe(received.append)
        with capture_logs() as logs:
            subject.next("value")

        assert received == ["value"]
        assert len(logs) == 1
        assert logs[0]["log_level"] == "error"
        assert logs[0]["event"] == "Subscriber failed"
        assert logs[0]["error"] == "subscriber bug"
        assert logs[0]["exc_info"] is True

    def test_unsubscribing_during_delivery_is_safe(self) -> None:
        subject = Subject()
        received = []
        subscriptions = []

        def once(value):
            received.append(("once", value))
            subscriptions[0].unsubscribe()

        subscriptions.append(subject.subscribe(once))
        subject.subscribe(lambda v: received.append(("always", v)))
        subject.next(1)
        subject.next(2)

        assert received == [("once", 1), ("always", 1), ("always", 2)]


class TestTerminalSignals:
    """Tests for error() and complete()."""

    def test_error_is_delivered_once_and_stops(self) -> None:
        subject = Subject()
        observer = Observer(on_next=MagicMock(), on_error=MagicMock())
        err = ValueError("fatal")

        subject.subscribe(observer)
        subject.error(err)
        subject.error(ValueError("second"))
        subject.next("ignored")

        observer.on_error.assert_called_once_with(err)
        observer.on_next.assert_not_called()
        assert subject.is_stopped is True
        assert subject.observer_count == 0

    def test_late_subscriber_receives_stored_error(self) -> None:
        subject = Subject()
        err = ValueError("fatal")
        subject.error(err)

        on_error = MagicMock()
        subscription = subject.subscribe(on_error=on_error)

        on_error.assert_called_once_with(err)
        assert subscription.closed is True

    def test_late_subscriber_receives_complete(self) -> None:
        subject = Subject()
        subject.complete()

        on_complete = MagicMock()
        subject.subscribe(on_complete=on_complete)

        on_complete.assert_called_once_with()
