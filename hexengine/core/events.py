"""
Publish/subscribe bus for battle notifications.

The battle controller announces every accepted change (placement,
loadout edits, ticks, the end of a battle) with an Enum member and
keyword data. Anything that wants to react, such as a renderer or a
log panel, subscribes without the controller knowing about it.

Usage:
    class BattleEvent(Enum):
        TICK_PROCESSED = auto()

    bus = EventBus()
    bus.subscribe(BattleEvent.TICK_PROCESSED, on_tick)
    bus.publish(BattleEvent.TICK_PROCESSED, tick=3, events=[...])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    One published notification.

    Attributes:
        type: Enum member identifying the notification
        data: Keyword data passed to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]
_HandlerRef = Union[EventHandler, ref, WeakMethod]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: _HandlerRef
    one_shot: bool = False

    def resolve(self) -> Optional[EventHandler]:
        """The live handler, or None once a weakly held one is collected."""
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


def _hold(handler: EventHandler, weak: bool) -> _HandlerRef:
    if not weak:
        return handler
    # Bound methods need WeakMethod or the reference dies immediately
    if hasattr(handler, '__self__'):
        return WeakMethod(handler)
    return ref(handler)


class EventBus:
    """
    Synchronous event bus.

    Handlers run highest priority first, in subscription order within a
    priority. Handlers are held weakly by default. An event published
    from inside a handler is queued and delivered after the current one
    finishes. A handler that raises is logged and skipped.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: list[Event] = []
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
        Register a handler for an event type.

        Args:
            event_type: Enum member to listen for
            handler: Called with the Event
            priority: Higher runs earlier (default 0)
            one_shot: Drop the handler after its first call
            weak: Hold only a weak reference (pass False for lambdas)
        """
        subscriptions = self._subscriptions.setdefault(event_type, [])
        entry = _Subscription(priority, _hold(handler, weak), one_shot)

        position = next(
            (i for i, existing in enumerate(subscriptions) if existing.priority < priority),
            len(subscriptions),
        )
        subscriptions.insert(position, entry)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        self._subscriptions[event_type] = [
            entry for entry in subscriptions if entry.resolve() != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Build and deliver an event.

        Returns:
            The delivered Event; check .consumed to see if a handler stopped it
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        if self._dispatching:
            self._pending.append(event)
            return
        self._deliver(event)
        while self._pending:
            self._deliver(self._pending.pop(0))

    def handler_count(self, event_type: Enum) -> int:
        """Live handlers for an event type."""
        return sum(
            1 for entry in self._subscriptions.get(event_type, ())
            if entry.resolve() is not None
        )

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished: list[_Subscription] = []
        self._dispatching = True
        try:
            for entry in list(subscriptions):
                handler = entry.resolve()
                if handler is None:
                    finished.append(entry)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Handler for {event.type} raised")

                if entry.one_shot:
                    finished.append(entry)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        if finished:
            self._subscriptions[event.type] = [
                entry for entry in subscriptions if entry not in finished
            ]
