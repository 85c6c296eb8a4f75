from __future__ import annotations

from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from core_center.progress_tracker import ProgressTracker
from event_bus import EventBus, category_endpoint
from progression.engine import ProgressSnapshot
from progression.layout import TrackLayout
from app_ui.theme import category_color

SOURCE_TAG = "progress-panel"
TRACK_HEIGHT = 70


def progress_caption(snapshot: ProgressSnapshot, total: int) -> str:
    return f"{snapshot.collected_count} of {total}"


def accessible_summary(snapshot: ProgressSnapshot, total: int) -> str:
    return (
        f"You have collected {snapshot.collected_count} out of {total} "
        f"{snapshot.category} teas. Current level: {snapshot.current_level.title}."
    )


class ProgressTrack(QtWidgets.QWidget):
    """QPainter rendering of a TrackLayout: track, fill segments, markers, indicator."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._layout: Optional[TrackLayout] = None
        self._color = QtGui.QColor(category_color(None))
        self.setMinimumHeight(TRACK_HEIGHT)

    def set_track(self, layout: TrackLayout, color: str, viewport_width: int) -> None:
        self._layout = layout
        self._color = QtGui.QColor(color)
        self.setMinimumWidth(layout.track_width(viewport_width) if layout.scrollable else 0)
        self.update()

    def indicator_x(self) -> float:
        if not self._layout:
            return 0.0
        return self._x(self._layout.indicator)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        if not self._layout:
            return
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        mid = self.height() / 2.0
        light = self._color.lighter(140)
        dark = self._color.darker(130)

        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(light)
        painter.drawRoundedRect(QtCore.QRectF(self._x(0), mid - 3, self._x(100) - self._x(0), 6), 3, 3)

        painter.setBrush(dark)
        for segment in self._layout.segments:
            if segment.fill_percent <= 0:
                continue
            start = self._x(segment.start)
            width = self._x(segment.start + segment.filled_width) - start
            painter.drawRoundedRect(QtCore.QRectF(start, mid - 3, width, 6), 3, 3)

        metrics = painter.fontMetrics()
        for placed in self._layout.milestones:
            x = self._x(placed.position)
            painter.setPen(QtGui.QPen(self._color, 3))
            painter.setBrush(dark if placed.milestone.achieved else light)
            painter.drawEllipse(QtCore.QPointF(x, mid), 5, 5)
            label = placed.milestone.label
            painter.setPen(self.palette().color(QtGui.QPalette.ColorRole.WindowText))
            painter.drawText(QtCore.QPointF(x - metrics.horizontalAdvance(label) / 2, mid + 22), label)

        x = self.indicator_x()
        painter.setPen(QtGui.QPen(self._color, 3))
        painter.setBrush(self._color.darker(150))
        painter.drawEllipse(QtCore.QPointF(x, mid), 11, 11)
        text = str(self._layout.count)
        painter.setPen(QtGui.QColor("white"))
        painter.drawText(
            QtCore.QPointF(x - metrics.horizontalAdvance(text) / 2, mid + metrics.ascent() / 2 - 1),
            text,
        )
        painter.end()

    def _x(self, percent: float) -> float:
        margin = 16.0
        return margin + (self.width() - 2 * margin) * percent / 100.0


class ProgressPanel(QtWidgets.QWidget):
    """Level title, progress message, badges and the milestone track for one category."""

    def __init__(
        self,
        bus: EventBus,
        tracker: ProgressTracker,
        *,
        active: str,
        total: int,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._tracker = tracker
        self._total = total
        self._sync = category_endpoint(bus, SOURCE_TAG, self._apply_category, initial=active)
        tracker.add_listener(self._on_progress)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        self.heading = QtWidgets.QLabel()
        self.heading.setStyleSheet("font-weight: bold;")
        self.count_label = QtWidgets.QLabel()
        self.level_label = QtWidgets.QLabel()
        self.message_label = QtWidgets.QLabel()
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet("font-style: italic;")
        self.badges_label = QtWidgets.QLabel()
        for widget in (self.heading, self.count_label, self.level_label, self.message_label, self.badges_label):
            layout.addWidget(widget)

        self.track = ProgressTrack()
        self.scroll = QtWidgets.QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setFixedHeight(TRACK_HEIGHT + 24)
        self.scroll.setVerticalScrollBarPolicy(QtCore.Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll.setWidget(self.track)
        layout.addWidget(self.scroll)
        layout.addStretch()

        self._apply_category(active)

    def close_sync(self) -> None:
        self._sync.close()

    def _apply_category(self, category: str) -> None:
        self._render(category, self._tracker.snapshot(category), self._tracker.layout(category))

    def _on_progress(self, category: str, snapshot: ProgressSnapshot, layout: TrackLayout) -> None:
        if category == self._sync.value:
            self._render(category, snapshot, layout)

    def _render(self, category: str, snapshot: ProgressSnapshot, layout: TrackLayout) -> None:
        self.heading.setText(f"{category} Tea Collection")
        self.count_label.setText(progress_caption(snapshot, self._total))
        self.level_label.setText(snapshot.current_level.title)
        self.message_label.setText(snapshot.progress_message)
        self.setAccessibleDescription(accessible_summary(snapshot, self._total))
        badges: List[str] = [
            f"{badge.icon} {badge.name}"
            for badge in self._tracker.engine.get_category_badges(category, snapshot.collected_count)
        ]
        self.badges_label.setText("  ".join(badges))
        self.track.set_track(layout, category_color(category), self.scroll.viewport().width())
        QtCore.QTimer.singleShot(50, self._center_indicator)

    def _center_indicator(self) -> None:
        bar = self.scroll.horizontalScrollBar()
        bar.setValue(int(self.track.indicator_x() - self.scroll.viewport().width() / 2))
