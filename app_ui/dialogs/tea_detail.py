from __future__ import annotations

from PyQt6 import QtWidgets

from core_center.collection_store import JsonCollectionStore
from event_bus import EventBus, topics
from event_bus.messages import ModalClosed, ModalOpened, SteepStarted

SOURCE_TAG = "detail-dialog"
MODAL_NAME = "tea-detail"


def open_tea_detail(
    parent: QtWidgets.QWidget,
    bus: EventBus,
    store: JsonCollectionStore,
    tea_id: str,
    *,
    steep_seconds: int,
) -> None:
    tea = store.get_tea(tea_id)
    if tea is None:
        return
    dialog = QtWidgets.QDialog(parent)
    dialog.setWindowTitle(str(tea.get("name") or "Tea"))
    layout = QtWidgets.QVBoxLayout(dialog)
    form = QtWidgets.QFormLayout()
    form.addRow("Category", QtWidgets.QLabel(str(tea.get("category") or "")))
    form.addRow("Added", QtWidgets.QLabel(str(tea.get("added_at") or "")))
    notes = QtWidgets.QPlainTextEdit(str(tea.get("notes") or ""))
    notes.setFixedHeight(80)
    form.addRow("Notes", notes)
    seconds = QtWidgets.QSpinBox()
    seconds.setRange(10, 900)
    seconds.setValue(int(steep_seconds))
    form.addRow("Steep (s)", seconds)
    layout.addLayout(form)

    row = QtWidgets.QHBoxLayout()
    steep_btn = QtWidgets.QPushButton("Steep")
    remove_btn = QtWidgets.QPushButton("Remove")
    close_btn = QtWidgets.QPushButton("Close")
    row.addWidget(steep_btn)
    row.addWidget(remove_btn)
    row.addStretch()
    row.addWidget(close_btn)
    layout.addLayout(row)

    def _steep() -> None:
        bus.emit(
            topics.STEEP_STARTED,
            SteepStarted(tea_name=str(tea.get("name") or ""), seconds=seconds.value(), source=SOURCE_TAG),
        )
        dialog.accept()

    def _remove() -> None:
        answer = QtWidgets.QMessageBox.question(dialog, "Remove Tea", f"Remove {tea.get('name')}?")
        if answer != QtWidgets.QMessageBox.StandardButton.Yes:
            return
        store.remove_tea(tea_id, source=SOURCE_TAG)
        dialog.accept()

    steep_btn.clicked.connect(_steep)
    remove_btn.clicked.connect(_remove)
    close_btn.clicked.connect(dialog.reject)

    bus.emit(topics.MODAL_OPENED, ModalOpened(modal=MODAL_NAME, source=SOURCE_TAG))
    try:
        dialog.exec()
        edited = notes.toPlainText()
        if edited != str(tea.get("notes") or "") and store.get_tea(tea_id) is not None:
            store.update_tea(tea_id, notes=edited, source=SOURCE_TAG)
    finally:
        bus.emit(topics.MODAL_CLOSED, ModalClosed(modal=MODAL_NAME, source=SOURCE_TAG))
