from __future__ import annotations

from typing import Dict, Optional, Sequence

from PyQt6 import QtWidgets

from event_bus import EventBus, category_endpoint
from app_ui.theme import category_stylesheet

SOURCE_TAG = "category-selector"


class CategorySelector(QtWidgets.QWidget):
    """
    Row of category pills.

    A click here is the only thing that makes this widget announce a category
    change; changes made elsewhere are applied to the pills silently.
    """

    def __init__(
        self,
        bus: EventBus,
        *,
        categories: Sequence[str],
        active: str,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._categories = list(categories)
        self._buttons: Dict[str, QtWidgets.QPushButton] = {}
        self._sync = category_endpoint(bus, SOURCE_TAG, self._apply_category, initial=active)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(6)
        layout.addStretch()
        for category in self._categories:
            button = QtWidgets.QPushButton(category)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, cat=category: self.handle_click(cat))
            self._buttons[category] = button
            layout.addWidget(button)
        layout.addStretch()

        self._apply_category(active)

    @property
    def active_category(self) -> Optional[str]:
        return self._sync.value

    def handle_click(self, category: str) -> None:
        if category not in self._buttons:
            return
        self._apply_category(category)
        self._sync.user_changed(category)

    def close_sync(self) -> None:
        self._sync.close()

    def _apply_category(self, category: str) -> None:
        self.setStyleSheet(category_stylesheet(category))
        for name, button in self._buttons.items():
            is_active = name == category
            button.setChecked(is_active)
            button.setProperty("active", "true" if is_active else "false")
            button.style().unpolish(button)
            button.style().polish(button)
