"""Event bus package providing the in-process widget dispatcher."""

from .bus import EventBus, Subscription
from . import topics
from .messages import Event, EventPayload
from .sync import SyncEndpoint, category_endpoint

__all__ = [
    "EventBus",
    "Subscription",
    "Event",
    "EventPayload",
    "topics",
    "SyncEndpoint",
    "category_endpoint",
]
