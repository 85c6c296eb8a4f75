from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from event_bus import EventBus  # noqa: E402


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture(scope="session", autouse=True)
def qapp():
    # keep a single QApplication alive for the whole session so widget tests
    # don't construct QWidgets after a discarded instance was collected
    from PyQt6 import QtWidgets

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
