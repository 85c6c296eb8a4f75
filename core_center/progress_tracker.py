from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from event_bus import EventBus, topics
from event_bus.messages import BadgeEarned, LevelUp, NotificationShow
from progression.engine import ProgressionEngine, ProgressSnapshot
from progression.layout import DEFAULT_UNIT_PX, TrackLayout, layout_for_levels

from .collection_store import CollectionStore

logger = logging.getLogger(__name__)

TRACKER_SOURCE = "progress-tracker"
DEFAULT_TOTAL = 52
DEFAULT_DEBOUNCE_MS = 300

Scheduler = Callable[[int, Callable[[], None]], None]
UpdateListener = Callable[[str, ProgressSnapshot, TrackLayout], None]


def immediate_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    callback()


class ProgressTracker:
    """Keeps per-category counts fresh and announces level-ups and badges.

    Item notifications schedule a reload through ``scheduler`` so a burst of
    additions collapses into one recount once the store has settled.
    """

    def __init__(
        self,
        bus: EventBus,
        store: CollectionStore,
        engine: Optional[ProgressionEngine] = None,
        *,
        total: int = DEFAULT_TOTAL,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        unit_px: int = DEFAULT_UNIT_PX,
        scheduler: Scheduler = immediate_scheduler,
    ) -> None:
        self._bus = bus
        self._store = store
        self._engine = engine or ProgressionEngine()
        self._total = max(0, int(total))
        self._debounce_ms = max(0, int(debounce_ms))
        self._unit_px = unit_px
        self._scheduler = scheduler
        self._counts: Dict[str, int] = {}
        self._generation: Dict[str, int] = {}
        self._listeners: List[UpdateListener] = []
        for category in self._engine.categories():
            self._counts[category] = self._fetch_count(category, 0)
        self._subscriptions = [
            store.on_item_added(self._on_item_changed),
            store.on_item_removed(self._on_item_changed),
        ]

    @property
    def engine(self) -> ProgressionEngine:
        return self._engine

    def add_listener(self, listener: UpdateListener) -> None:
        self._listeners.append(listener)

    def count(self, category: str) -> int:
        return self._counts.get(category, 0)

    def total_count(self) -> int:
        return sum(self._counts.values())

    def snapshot(self, category: str) -> ProgressSnapshot:
        return self._engine.get_collection_progress(category, self.count(category))

    def layout(self, category: str) -> TrackLayout:
        levels = self._engine.table.levels(category)
        return layout_for_levels(levels, self.count(category), self._total, self._unit_px)

    def reload(self, category: str) -> ProgressSnapshot:
        old_count = self.count(category)
        old_total = self.total_count()
        new_count = self._fetch_count(category, old_count)
        self._counts[category] = new_count
        if new_count > old_count:
            self._announce(category, old_count, new_count, old_total)
        snapshot = self.snapshot(category)
        layout = self.layout(category)
        for listener in list(self._listeners):
            listener(category, snapshot, layout)
        return snapshot

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.remove()
        self._subscriptions = []

    def _on_item_changed(self, payload: object) -> None:
        category = getattr(payload, "category", None)
        if not category or category not in self._counts:
            return
        generation = self._generation.get(category, 0) + 1
        self._generation[category] = generation

        def _run() -> None:
            if self._generation.get(category) != generation:
                return
            self.reload(category)

        self._scheduler(self._debounce_ms, _run)

    def _fetch_count(self, category: str, fallback: int) -> int:
        try:
            return max(0, int(self._store.get_category_count(category)))
        except Exception as exc:
            logger.error("progress count load failed category=%s error=%s", category, exc)
            return fallback

    def _announce(self, category: str, old_count: int, new_count: int, old_total: int) -> None:
        for info in self._engine.check_level_ups(category, old_count, new_count):
            logger.info("level up category=%s level=%s", category, info.level.title)
            self._bus.emit(
                topics.LEVEL_UP,
                LevelUp(
                    category=category,
                    level=info.level,
                    badges=info.badges,
                    message=info.message,
                    source=TRACKER_SOURCE,
                ),
            )
            for badge in info.badges:
                self._bus.emit(
                    topics.BADGE_EARNED,
                    BadgeEarned(category=category, badge=badge, source=TRACKER_SOURCE),
                )
        milestone = self._engine.check_milestones(self.total_count(), old_total)
        if milestone is not None:
            self._bus.emit(
                topics.NOTIFICATION_SHOW,
                NotificationShow(
                    message=f"{milestone.icon} {milestone.name}: {milestone.description}",
                    kind="milestone",
                    source=TRACKER_SOURCE,
                ),
            )
