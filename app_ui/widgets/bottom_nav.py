from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from PyQt6 import QtCore, QtWidgets

from event_bus import EventBus, category_endpoint, topics
from event_bus.messages import SteepStarted, TimerCompleted
from app_ui.theme import category_color

SOURCE_TAG = "bottom-nav"
TABS = ("collection", "progress")


def format_countdown(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class SteepCountdown:
    """Second-granularity countdown for one steep; ticking is driven externally."""

    def __init__(self) -> None:
        self.tea_name: Optional[str] = None
        self.remaining = 0

    @property
    def running(self) -> bool:
        return self.tea_name is not None and self.remaining > 0

    def start(self, tea_name: str, seconds: int) -> None:
        self.tea_name = tea_name
        self.remaining = max(0, int(seconds))

    def tick(self) -> bool:
        """Advance one second; True exactly once, when the steep finishes."""
        if not self.running:
            return False
        self.remaining -= 1
        return self.remaining == 0

    def cancel(self) -> None:
        self.tea_name = None
        self.remaining = 0


class BottomNav(QtWidgets.QWidget):
    """Tab bar plus steep timer; tracks the active category for its accent color only."""

    tab_selected = QtCore.pyqtSignal(str)

    def __init__(
        self,
        bus: EventBus,
        *,
        active: str,
        on_add_tea: Optional[Callable[[], None]] = None,
        tabs: Sequence[str] = TABS,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._bus = bus
        self._countdown = SteepCountdown()
        self._sync = category_endpoint(bus, SOURCE_TAG, self._apply_category, initial=active)
        self._steep_sub = bus.on(topics.STEEP_STARTED, self._on_steep_started)
        self._buttons: Dict[str, QtWidgets.QPushButton] = {}

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(1000)
        self._timer.timeout.connect(self._on_tick)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        for tab in tabs:
            button = QtWidgets.QPushButton(tab.title())
            button.clicked.connect(lambda _checked=False, name=tab: self.tab_selected.emit(name))
            self._buttons[tab] = button
            layout.addWidget(button)
        if on_add_tea:
            add_btn = QtWidgets.QPushButton("+ Add")
            add_btn.clicked.connect(on_add_tea)
            layout.addWidget(add_btn)
        layout.addStretch()
        self.timer_label = QtWidgets.QLabel("")
        layout.addWidget(self.timer_label)

        self._apply_category(active)

    def close_sync(self) -> None:
        self._timer.stop()
        self._sync.close()
        self._steep_sub.remove()

    def _apply_category(self, category: str) -> None:
        self.setStyleSheet(f"background-color: {category_color(category, light=True)};")

    def _on_steep_started(self, payload: object) -> None:
        if not isinstance(payload, SteepStarted):
            return
        self._countdown.start(payload.tea_name, payload.seconds)
        self.timer_label.setText(f"{payload.tea_name} {format_countdown(payload.seconds)}")
        if self._countdown.running:
            self._timer.start()

    def _on_tick(self) -> None:
        finished = self._countdown.tick()
        name = self._countdown.tea_name or ""
        self.timer_label.setText(f"{name} {format_countdown(self._countdown.remaining)}")
        if finished:
            self._timer.stop()
            self._countdown.cancel()
            self._bus.emit(topics.TIMER_COMPLETED, TimerCompleted(tea_name=name, source=SOURCE_TAG))
