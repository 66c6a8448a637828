"""
Typed event bus for dialog notifications.

Hosts subscribe to DialogEvent members to react to sequencing without
wrapping the session: play a sound when a line appears, unlock input
when a sequence runs out, and so on.

Usage:
    bus = EventBus()
    bus.subscribe(DialogEvent.STATEMENT_DISPLAYED, on_line)
    session = DialogSession(surface, events=bus)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class DialogEvent(Enum):
    """Events published by a dialog session."""
    SEQUENCE_LOADED = auto()      # Unnamed sequence installed
    LABEL_STARTED = auto()        # start_label() called (label may be unknown)
    STATEMENT_DISPLAYED = auto()  # A parsed line was handed to the surface
    COMMANDS_EXECUTED = auto()    # Embedded commands of a line ran
    SEQUENCE_EXHAUSTED = auto()   # advance() ran past the last statement
    DIALOG_CLEARED = auto()       # Surface asked to clear its dialogs


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Event-specific keyword data
        consumed: Set by a handler to stop propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop later handlers from seeing this event."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    handler: Any  # strong callable, ref or WeakMethod
    one_shot: bool

    def resolve(self) -> EventHandler | None:
        if isinstance(self.handler, (ref, WeakMethod)):
            return self.handler()
        return self.handler


class EventBus:
    """
    Publish/subscribe messaging keyed by Enum members.

    Features:
    - Priority ordering (higher first, stable for equal priorities)
    - Weak references by default
    - One-shot handlers
    - Event consumption
    - Events published from a handler are queued until the current
      dispatch finishes
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            one_shot: Remove the handler after its first call
            weak: Hold the handler through a weak reference
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)
        else:
            target = handler

        subscriptions = self._subscriptions.setdefault(event_type, [])
        index = len(subscriptions)
        for i, existing in enumerate(subscriptions):
            if priority > existing.priority:
                index = i
                break
        subscriptions.insert(index, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler from an event type."""
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        self._subscriptions[event_type] = [
            s for s in subscriptions if s.resolve() != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if subscriptions:
            self._dispatching = True
            try:
                self._call_handlers(event, subscriptions)
            finally:
                self._dispatching = False

        while self._queue:
            self._dispatch(self._queue.pop(0))

    def _call_handlers(self, event: Event, subscriptions: list[_Subscription]) -> None:
        stale: list[_Subscription] = []

        for subscription in list(subscriptions):
            handler = subscription.resolve()
            if handler is None:
                stale.append(subscription)
                continue

            try:
                handler(event)
            except Exception:
                # Log but keep dispatching
                logger.exception(f"Error in event handler for {event.type}")

            if subscription.one_shot:
                stale.append(subscription)
            if event.consumed:
                break

        for subscription in stale:
            if subscription in subscriptions:
                subscriptions.remove(subscription)
