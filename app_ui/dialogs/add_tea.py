from __future__ import annotations

from typing import Dict, Optional, Sequence

from PyQt6 import QtWidgets

from core_center.collection_store import JsonCollectionStore
from event_bus import EventBus, topics
from event_bus.messages import ModalClosed, ModalOpened

SOURCE_TAG = "add-dialog"
MODAL_NAME = "add-tea"


def open_add_tea(
    parent: QtWidgets.QWidget,
    bus: EventBus,
    store: JsonCollectionStore,
    *,
    categories: Sequence[str],
    active: Optional[str],
) -> Optional[Dict[str, object]]:
    """Ask for a new tea and add it to the store; returns the stored tea on success."""
    dialog = QtWidgets.QDialog(parent)
    dialog.setWindowTitle("Add Tea")
    layout = QtWidgets.QVBoxLayout(dialog)
    form = QtWidgets.QFormLayout()

    name = QtWidgets.QLineEdit()
    name.setPlaceholderText("Dragon Well")
    form.addRow("Name", name)

    category = QtWidgets.QComboBox()
    for item in categories:
        category.addItem(item, item)
    index = category.findData(active)
    if index >= 0:
        category.setCurrentIndex(index)
    form.addRow("Category", category)

    notes = QtWidgets.QPlainTextEdit()
    notes.setFixedHeight(80)
    form.addRow("Notes", notes)
    layout.addLayout(form)

    buttons = QtWidgets.QDialogButtonBox(
        QtWidgets.QDialogButtonBox.StandardButton.Ok
        | QtWidgets.QDialogButtonBox.StandardButton.Cancel
    )
    buttons.accepted.connect(dialog.accept)
    buttons.rejected.connect(dialog.reject)
    layout.addWidget(buttons)

    bus.emit(topics.MODAL_OPENED, ModalOpened(modal=MODAL_NAME, source=SOURCE_TAG))
    try:
        if dialog.exec() != QtWidgets.QDialog.DialogCode.Accepted:
            return None
        result = store.add_tea(
            name.text(),
            str(category.currentData() or ""),
            notes=notes.toPlainText().strip(),
            source=SOURCE_TAG,
        )
    finally:
        bus.emit(topics.MODAL_CLOSED, ModalClosed(modal=MODAL_NAME, source=SOURCE_TAG))
    if not result.get("ok"):
        QtWidgets.QMessageBox.warning(parent, "Add Tea", f"Could not add tea: {result.get('error')}")
        return None
    return result.get("tea")
