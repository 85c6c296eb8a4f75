"""Source-tagged state synchronization between widgets sharing one event type.

Only the widget whose user action caused a change emits; every other widget
applies the change silently. Events carrying the receiver's own tag are
ignored.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

from . import topics
from .bus import EventBus
from .messages import CategoryChanged, payload_source

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyncEndpoint(Generic[T]):
    def __init__(
        self,
        bus: EventBus,
        *,
        source_tag: str,
        topic: str,
        apply: Callable[[T], None],
        payload_factory: Callable[[T, str], object],
        value_of: Callable[[object], Optional[T]],
        initial: Optional[T] = None,
    ) -> None:
        if not source_tag:
            raise ValueError("source_tag is required")
        self._bus = bus
        self._source_tag = source_tag
        self._topic = topic
        self._apply = apply
        self._payload_factory = payload_factory
        self._value_of = value_of
        self._value = initial
        self._subscription = bus.on(topic, self._on_event)

    @property
    def source_tag(self) -> str:
        return self._source_tag

    @property
    def value(self) -> Optional[T]:
        return self._value

    def user_changed(self, value: T) -> bool:
        """Record a change made by the owning widget and broadcast it once.

        Returns False when nothing was sent: either the value is unchanged or
        the bus refused the emit because a change of the same type is still
        being dispatched, in which case the owner is put back in step with it.
        """
        if value == self._value:
            return False
        previous = self._value
        self._value = value
        if self._bus.emit(self._topic, self._payload_factory(value, self._source_tag)) is None:
            # refused while another change of this type is dispatching; that change wins
            logger.warning("%s change to %r refused, keeping %r", self._source_tag, value, previous)
            self._value = previous
            if previous is not None:
                self._apply(previous)
            return False
        return True

    def close(self) -> None:
        self._subscription.remove()

    def _on_event(self, payload: object) -> None:
        if payload_source(payload) == self._source_tag:
            return
        value = self._value_of(payload)
        if value is None or value == self._value:
            return
        self._value = value
        logger.debug("%s follows %s -> %r", self._source_tag, self._topic, value)
        self._apply(value)


def category_endpoint(
    bus: EventBus,
    source_tag: str,
    apply: Callable[[str], None],
    initial: Optional[str] = None,
) -> SyncEndpoint[str]:
    return SyncEndpoint(
        bus,
        source_tag=source_tag,
        topic=topics.CATEGORY_CHANGED,
        apply=apply,
        payload_factory=lambda category, source: CategoryChanged(category=category, source=source),
        value_of=lambda payload: getattr(payload, "category", None),
        initial=initial,
    )
