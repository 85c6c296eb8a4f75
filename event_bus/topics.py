"""Event type constants for the collection event bus."""

# Collection
ITEM_ADDED = "item-added"
ITEM_REMOVED = "item-removed"
ITEM_UPDATED = "item-updated"
ITEM_SELECTED = "item-selected"

# Category
CATEGORY_CHANGED = "category-changed"

# Brewing
STEEP_STARTED = "steep-started"
TIMER_COMPLETED = "timer-completed"

# Achievements
LEVEL_UP = "level-up"
BADGE_EARNED = "badge-earned"

# UI
MODAL_OPENED = "modal-opened"
MODAL_CLOSED = "modal-closed"
NOTIFICATION_SHOW = "notification-show"

ALL_TOPICS = (
    ITEM_ADDED,
    ITEM_REMOVED,
    ITEM_UPDATED,
    ITEM_SELECTED,
    CATEGORY_CHANGED,
    STEEP_STARTED,
    TIMER_COMPLETED,
    LEVEL_UP,
    BADGE_EARNED,
    MODAL_OPENED,
    MODAL_CLOSED,
    NOTIFICATION_SHOW,
)

__all__ = [
    "ITEM_ADDED",
    "ITEM_REMOVED",
    "ITEM_UPDATED",
    "ITEM_SELECTED",
    "CATEGORY_CHANGED",
    "STEEP_STARTED",
    "TIMER_COMPLETED",
    "LEVEL_UP",
    "BADGE_EARNED",
    "MODAL_OPENED",
    "MODAL_CLOSED",
    "NOTIFICATION_SHOW",
    "ALL_TOPICS",
]
