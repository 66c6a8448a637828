import pytest
from enum import Enum, auto
from parley.core.events import EventBus, Event, DialogEvent


class MockEvent(Enum):
    TEST_EVENT = auto()
    OTHER_EVENT = auto()


def test_event_bus_subscribe_publish(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT, label="begin")

    assert len(received) == 1
    assert received[0].type == MockEvent.TEST_EVENT
    assert received[0]["label"] == "begin"
    assert received[0].get("missing", 3) == 3


def test_event_bus_unsubscribe(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.unsubscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert received == []


def test_event_priority(event_bus):
    order = []

    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("low"), priority=1, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("high"), priority=10, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal"), priority=5, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal2"), priority=5, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["high", "normal", "normal2", "low"]


def test_event_consumption(event_bus):
    received = []

    def consumer(event):
        received.append("consumer")
        event.consume()

    def later_handler(event):
        received.append("later")

    event_bus.subscribe(MockEvent.TEST_EVENT, consumer, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, later_handler, priority=5)

    event = event_bus.publish(MockEvent.TEST_EVENT)

    assert received == ["consumer"]
    assert event.consumed


def test_one_shot_handler(event_bus):
    calls = []
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: calls.append(1), one_shot=True, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert calls == [1]


def test_weak_handler_is_dropped():
    bus = EventBus()
    calls = []

    class Listener:
        def on_event(self, event):
            calls.append(event)

    listener = Listener()
    bus.subscribe(MockEvent.TEST_EVENT, listener.on_event)
    bus.publish(MockEvent.TEST_EVENT)
    del listener
    bus.publish(MockEvent.TEST_EVENT)

    assert len(calls) == 1


def test_handler_errors_do_not_stop_dispatch(event_bus):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(MockEvent.TEST_EVENT, broken, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: received.append(e), weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 1


def test_nested_publish_is_queued(event_bus):
    order = []

    def first(event):
        order.append("first")
        event_bus.publish(MockEvent.OTHER_EVENT)
        order.append("first done")

    event_bus.subscribe(MockEvent.TEST_EVENT, first)
    event_bus.subscribe(MockEvent.OTHER_EVENT, lambda e: order.append("other"), weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["first", "first done", "other"]


def test_clear(event_bus):
    calls = []
    event_bus.subscribe(DialogEvent.DIALOG_CLEARED, lambda e: calls.append(e), weak=False)
    event_bus.subscribe(DialogEvent.LABEL_STARTED, lambda e: calls.append(e), weak=False)

    event_bus.clear(DialogEvent.DIALOG_CLEARED)
    event_bus.publish(DialogEvent.DIALOG_CLEARED)
    assert calls == []

    event_bus.clear()
    event_bus.publish(DialogEvent.LABEL_STARTED)
    assert calls == []
