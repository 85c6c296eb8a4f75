from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from PyQt6 import QtCore, QtGui, QtWidgets

from event_bus import EventBus, category_endpoint, topics
from event_bus.messages import ItemSelected
from app_ui.theme import category_color

SOURCE_TAG = "collection-grid"
SWIPE_THRESHOLD_PX = 30
GRID_COLUMNS = 4


def swipe_step(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD_PX) -> int:
    """-1 for a right swipe (previous), +1 for a left swipe (next), 0 otherwise."""
    if abs(dx) <= abs(dy) or abs(dx) < threshold:
        return 0
    return -1 if dx > 0 else 1


def step_category(categories: Sequence[str], current: Optional[str], step: int) -> Optional[str]:
    if not categories:
        return None
    try:
        index = list(categories).index(current)
    except ValueError:
        index = 0
    return categories[(index + step) % len(categories)]


class CollectionGrid(QtWidgets.QWidget):
    """Swipeable grid of the teas collected in the active category."""

    def __init__(
        self,
        bus: EventBus,
        *,
        categories: Sequence[str],
        active: str,
        list_teas: Callable[[str], List[Dict[str, object]]],
        on_open_tea: Optional[Callable[[str], None]] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._bus = bus
        self._categories = list(categories)
        self._list_teas = list_teas
        self._on_open_tea = on_open_tea
        self._press_pos: Optional[QtCore.QPointF] = None
        self._sync = category_endpoint(bus, SOURCE_TAG, self._apply_category, initial=active)
        self._subscriptions = [
            bus.on(topics.ITEM_ADDED, self._on_collection_changed),
            bus.on(topics.ITEM_REMOVED, self._on_collection_changed),
            bus.on(topics.ITEM_UPDATED, self._on_collection_changed),
        ]

        outer = QtWidgets.QVBoxLayout(self)
        outer.setContentsMargins(8, 8, 8, 8)
        self.title = QtWidgets.QLabel()
        self.title.setStyleSheet("font-size: 16px; font-weight: bold;")
        outer.addWidget(self.title)
        self._grid_host = QtWidgets.QWidget()
        self._grid = QtWidgets.QGridLayout(self._grid_host)
        self._grid.setSpacing(6)
        outer.addWidget(self._grid_host)
        outer.addStretch()

        self.refresh()

    @property
    def category(self) -> Optional[str]:
        return self._sync.value

    def refresh(self, category: Optional[str] = None) -> None:
        category = category or self._sync.value or ""
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget() if item else None
            if widget is not None:
                widget.deleteLater()
        teas = self._list_teas(category) if category else []
        self.title.setText(f"{category} Tea Collection ({len(teas)})")
        color = category_color(category)
        for index, tea in enumerate(teas):
            tea_id = str(tea.get("id") or "")
            button = QtWidgets.QPushButton(str(tea.get("name") or tea_id))
            button.setMinimumHeight(48)
            button.setStyleSheet(f"background-color: {color}; border-radius: 8px;")
            button.clicked.connect(lambda _checked=False, tid=tea_id: self._select_tea(tid))
            button.installEventFilter(self)
            self._grid.addWidget(button, index // GRID_COLUMNS, index % GRID_COLUMNS)

    def navigate(self, step: int) -> None:
        target = step_category(self._categories, self._sync.value, step)
        if target is None:
            return
        self._apply_category(target)
        self._sync.user_changed(target)

    def close_sync(self) -> None:
        self._sync.close()
        for subscription in self._subscriptions:
            subscription.remove()
        self._subscriptions = []

    def eventFilter(self, watched: QtCore.QObject, event: QtCore.QEvent) -> bool:
        # tea buttons grab the press, so swipes starting on them are seen here
        kind = event.type()
        if kind == QtCore.QEvent.Type.MouseButtonPress:
            self._press_pos = event.globalPosition()
        elif kind == QtCore.QEvent.Type.MouseButtonRelease:
            if self._finish_swipe(event.globalPosition()):
                return True
        return super().eventFilter(watched, event)

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        self._press_pos = event.globalPosition()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:
        self._finish_swipe(event.globalPosition())
        super().mouseReleaseEvent(event)

    def _finish_swipe(self, position: QtCore.QPointF) -> bool:
        if self._press_pos is None:
            return False
        delta = position - self._press_pos
        self._press_pos = None
        step = swipe_step(delta.x(), delta.y())
        if step:
            self.navigate(step)
        return bool(step)

    def _apply_category(self, category: str) -> None:
        self.refresh(category)

    def _on_collection_changed(self, payload: object) -> None:
        if getattr(payload, "category", None) == self._sync.value:
            self.refresh()

    def _select_tea(self, tea_id: str) -> None:
        category = self._sync.value or ""
        self._bus.emit(
            topics.ITEM_SELECTED,
            ItemSelected(tea_id=tea_id, category=category, source=SOURCE_TAG),
        )
        if self._on_open_tea:
            self._on_open_tea(tea_id)
