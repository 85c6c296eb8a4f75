from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple, Type, Union

from . import topics

if TYPE_CHECKING:
    from progression.levels import Badge, LevelDefinition


@dataclass(frozen=True)
class ItemAdded:
    tea_id: str
    name: str
    category: str
    source: Optional[str] = None


@dataclass(frozen=True)
class ItemRemoved:
    tea_id: str
    name: str
    category: str
    source: Optional[str] = None


@dataclass(frozen=True)
class ItemUpdated:
    tea_id: str
    name: str
    category: str
    source: Optional[str] = None


@dataclass(frozen=True)
class ItemSelected:
    tea_id: str
    category: str
    source: Optional[str] = None


@dataclass(frozen=True)
class CategoryChanged:
    category: str
    source: Optional[str] = None


@dataclass(frozen=True)
class SteepStarted:
    tea_name: str
    seconds: int
    source: Optional[str] = None


@dataclass(frozen=True)
class TimerCompleted:
    tea_name: str
    source: Optional[str] = None


@dataclass(frozen=True)
class LevelUp:
    category: str
    level: "LevelDefinition"
    badges: Tuple["Badge", ...] = ()
    message: str = ""
    source: Optional[str] = None


@dataclass(frozen=True)
class BadgeEarned:
    category: str
    badge: "Badge"
    source: Optional[str] = None


@dataclass(frozen=True)
class ModalOpened:
    modal: str
    source: Optional[str] = None


@dataclass(frozen=True)
class ModalClosed:
    modal: str
    source: Optional[str] = None


@dataclass(frozen=True)
class NotificationShow:
    message: str
    kind: str = "info"
    source: Optional[str] = None


EventPayload = Union[
    ItemAdded,
    ItemRemoved,
    ItemUpdated,
    ItemSelected,
    CategoryChanged,
    SteepStarted,
    TimerCompleted,
    LevelUp,
    BadgeEarned,
    ModalOpened,
    ModalClosed,
    NotificationShow,
]

PAYLOAD_TYPES: Dict[str, Type] = {
    topics.ITEM_ADDED: ItemAdded,
    topics.ITEM_REMOVED: ItemRemoved,
    topics.ITEM_UPDATED: ItemUpdated,
    topics.ITEM_SELECTED: ItemSelected,
    topics.CATEGORY_CHANGED: CategoryChanged,
    topics.STEEP_STARTED: SteepStarted,
    topics.TIMER_COMPLETED: TimerCompleted,
    topics.LEVEL_UP: LevelUp,
    topics.BADGE_EARNED: BadgeEarned,
    topics.MODAL_OPENED: ModalOpened,
    topics.MODAL_CLOSED: ModalClosed,
    topics.NOTIFICATION_SHOW: NotificationShow,
}


@dataclass(slots=True)
class Event:
    """Envelope built for every emission; never stored past the last one."""

    type: str
    payload: object = None
    source: Optional[str] = None
    timestamp: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type,
            "source": self.source,
            "timestamp": self.timestamp,
            "payload_type": type(self.payload).__name__,
        }


def payload_source(payload: object) -> Optional[str]:
    if isinstance(payload, dict):
        value = payload.get("source")
    else:
        value = getattr(payload, "source", None)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def payload_matches(topic: str, payload: object) -> bool:
    expected = PAYLOAD_TYPES.get(topic)
    if expected is None:
        return True
    return isinstance(payload, expected)
