from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

from PyQt6 import QtCore, QtWidgets

from app_ui import config as ui_config
from app_ui.dialogs.add_tea import open_add_tea
from app_ui.dialogs.tea_detail import open_tea_detail
from app_ui.widgets.bottom_nav import BottomNav
from app_ui.widgets.category_selector import CategorySelector
from app_ui.widgets.collection_grid import CollectionGrid
from app_ui.widgets.progress_panel import ProgressPanel
from core_center.collection_store import JsonCollectionStore
from core_center.progress_tracker import ProgressTracker
from diagnostics.logging_setup import configure_logging
from event_bus import EventBus, topics
from event_bus.messages import BadgeEarned, CategoryChanged, LevelUp, NotificationShow, TimerCompleted
from progression.engine import ProgressionEngine

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 5000


def qt_scheduler(delay_ms: int, callback) -> None:
    QtCore.QTimer.singleShot(delay_ms, callback)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, bus: EventBus, store: JsonCollectionStore, engine: ProgressionEngine) -> None:
        super().__init__()
        self.setWindowTitle("Teashelf")
        self.resize(480, 760)
        self._bus = bus
        self._store = store
        categories = engine.categories()
        active = ui_config.get_active_category()
        total = ui_config.get_collection_total()
        self._tracker = ProgressTracker(
            bus,
            store,
            engine,
            total=total,
            debounce_ms=ui_config.get_reload_debounce_ms(),
            unit_px=ui_config.get_track_unit_px(),
            scheduler=qt_scheduler,
        )

        self.selector = CategorySelector(bus, categories=categories, active=active)
        self.grid = CollectionGrid(
            bus,
            categories=categories,
            active=active,
            list_teas=store.list_teas,
            on_open_tea=self._open_detail,
        )
        self.progress = ProgressPanel(bus, self._tracker, active=active, total=total)
        self.nav = BottomNav(bus, active=active, on_add_tea=self._open_add)

        self._pages: Dict[str, QtWidgets.QWidget] = {"collection": self.grid, "progress": self.progress}
        self.stack = QtWidgets.QStackedWidget()
        for page in self._pages.values():
            self.stack.addWidget(page)
        self.nav.tab_selected.connect(self._show_tab)

        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.selector)
        layout.addWidget(self.stack, 1)
        layout.addWidget(self.nav)
        self.setCentralWidget(central)

        self._subscriptions = [
            bus.on(topics.CATEGORY_CHANGED, self._on_category_changed),
            bus.on(topics.LEVEL_UP, self._on_level_up),
            bus.on(topics.BADGE_EARNED, self._on_badge_earned),
            bus.on(topics.NOTIFICATION_SHOW, self._on_notification),
            bus.on(topics.TIMER_COMPLETED, self._on_timer_completed),
        ]

    def closeEvent(self, event) -> None:
        for subscription in self._subscriptions:
            subscription.remove()
        for widget in (self.selector, self.grid, self.progress, self.nav):
            widget.close_sync()
        self._tracker.close()
        super().closeEvent(event)

    def _show_tab(self, name: str) -> None:
        page = self._pages.get(name)
        if page is not None:
            self.stack.setCurrentWidget(page)

    def _open_add(self) -> None:
        open_add_tea(
            self,
            self._bus,
            self._store,
            categories=self._tracker.engine.categories(),
            active=self.selector.active_category,
        )

    def _open_detail(self, tea_id: str) -> None:
        open_tea_detail(self, self._bus, self._store, tea_id, steep_seconds=ui_config.get_steep_seconds())

    def _on_category_changed(self, payload: object) -> None:
        if isinstance(payload, CategoryChanged):
            ui_config.save_active_category(payload.category)

    def _on_level_up(self, payload: object) -> None:
        if isinstance(payload, LevelUp):
            self.statusBar().showMessage(payload.message, STATUS_TIMEOUT_MS)

    def _on_badge_earned(self, payload: object) -> None:
        if isinstance(payload, BadgeEarned):
            badge = payload.badge
            self.statusBar().showMessage(f"{badge.icon} Badge earned: {badge.name}", STATUS_TIMEOUT_MS)

    def _on_notification(self, payload: object) -> None:
        if isinstance(payload, NotificationShow):
            self.statusBar().showMessage(payload.message, STATUS_TIMEOUT_MS)

    def _on_timer_completed(self, payload: object) -> None:
        if isinstance(payload, TimerCompleted):
            QtWidgets.QMessageBox.information(self, "Steep", f"{payload.tea_name} is ready.")


def build_window(bus: Optional[EventBus] = None) -> MainWindow:
    bus = bus or EventBus()
    store = JsonCollectionStore(bus)
    return MainWindow(bus, store, ProgressionEngine())


def main() -> None:
    info = configure_logging()
    logger.info("teashelf starting log=%s", info["log_path"])
    app = QtWidgets.QApplication(sys.argv)
    window = build_window()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
