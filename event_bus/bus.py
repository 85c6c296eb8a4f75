from __future__ import annotations

import itertools
import logging
import time
from typing import Callable, Dict, List, Optional, Set

from .messages import Event, payload_matches, payload_source

logger = logging.getLogger(__name__)

Handler = Callable[[object], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


class _Listener:
    __slots__ = ("token", "callback", "original")

    def __init__(self, token: int, callback: Handler, original: Handler) -> None:
        self.token = token
        self.callback = callback
        self.original = original


class Subscription:
    """Handle returned by ``on``/``once``; ``remove`` drops this registration only."""

    def __init__(self, bus: "EventBus", topic: str, token: int) -> None:
        self._bus = bus
        self._topic = topic
        self._token = token

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def active(self) -> bool:
        return self._bus._has_token(self._topic, self._token)

    def remove(self) -> None:
        self._bus._remove_token(self._topic, self._token)


class EventBus:
    """In-process synchronous pub/sub bus shared by the UI widgets.

    Handlers run in registration order against a snapshot of the listener
    list, each isolated from the others' exceptions. A nested ``emit`` of a
    type that is already being dispatched is rejected and logged.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[_Listener]] = {}
        self._tokens = itertools.count(1)
        self._dispatching: Set[str] = set()
        self._last_event: Optional[Event] = None

    def on(self, topic: str, handler: Handler) -> Subscription:
        return self._register(topic, handler, handler)

    def off(self, topic: str, handler: Handler) -> None:
        listeners = self._listeners.get(topic)
        if not listeners:
            return
        remaining = [entry for entry in listeners if entry.original != handler]
        self._store(topic, remaining)

    def once(self, topic: str, handler: Handler) -> Subscription:
        fired = False
        subscription: Optional[Subscription] = None

        def _wrapped(payload: object) -> None:
            nonlocal fired
            if fired:
                return
            fired = True
            if subscription is not None:
                subscription.remove()
            handler(payload)

        subscription = self._register(topic, _wrapped, handler)
        return subscription

    def emit(self, topic: str, payload: object = None) -> Optional[Event]:
        source = payload_source(payload)
        if topic in self._dispatching:
            logger.warning(
                "event_bus rejected reentrant emit of %s (source=%s)", topic, source
            )
            return None
        if not payload_matches(topic, payload):
            logger.warning(
                "event_bus payload %s does not match event type %s",
                type(payload).__name__,
                topic,
            )
        event = Event(type=topic, payload=payload, source=source, timestamp=_now_ms())
        self._last_event = event
        listeners = list(self._listeners.get(topic, ()))
        if not listeners:
            return event
        self._dispatching.add(topic)
        try:
            for listener in listeners:
                try:
                    listener.callback(payload)
                except Exception as exc:
                    logger.error(
                        "event_bus handler error on %s: %s", topic, exc, exc_info=True
                    )
        finally:
            self._dispatching.discard(topic)
        return event

    def clear(self, topic: Optional[str] = None) -> None:
        if topic is None:
            self._listeners.clear()
        else:
            self._listeners.pop(topic, None)

    def listener_count(self, topic: str) -> int:
        return len(self._listeners.get(topic, ()))

    def event_types(self) -> List[str]:
        return list(self._listeners.keys())

    def is_dispatching(self, topic: str) -> bool:
        return topic in self._dispatching

    @property
    def last_event(self) -> Optional[Event]:
        return self._last_event

    def _register(self, topic: str, callback: Handler, original: Handler) -> Subscription:
        token = next(self._tokens)
        self._listeners.setdefault(topic, []).append(_Listener(token, callback, original))
        return Subscription(self, topic, token)

    def _has_token(self, topic: str, token: int) -> bool:
        return any(entry.token == token for entry in self._listeners.get(topic, ()))

    def _remove_token(self, topic: str, token: int) -> None:
        listeners = self._listeners.get(topic)
        if not listeners:
            return
        self._store(topic, [entry for entry in listeners if entry.token != token])

    def _store(self, topic: str, listeners: List[_Listener]) -> None:
        if listeners:
            self._listeners[topic] = listeners
        else:
            self._listeners.pop(topic, None)
