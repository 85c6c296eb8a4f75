# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

from progression.levels import CATEGORIES

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("data/roaming/teashelf_config.json")
_DEFAULT_CONFIG = {
    "active_category": CATEGORIES[0],
    "collection_total": 52,
    "reload_debounce_ms": 300,
    "track_unit_px": 100,
    "steep_seconds": 180,
}


# === [NAV-10] Config loading (defaults/roaming) ===============================
def load_config() -> Dict:
    path = CONFIG_PATH
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(_DEFAULT_CONFIG, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("config write failed path=%s error=%s", path, exc)
        return _DEFAULT_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return _DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_CONFIG.copy()
    for key, value in _DEFAULT_CONFIG.items():
        data.setdefault(key, value)
    return data


def save_config(data: Dict) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")


def save_active_category(category: str) -> None:
    if category not in CATEGORIES:
        return
    data = load_config()
    data["active_category"] = category
    try:
        save_config(data)
    except OSError as exc:
        logger.warning("config save failed error=%s", exc)


# === [NAV-20] Public getters ==================================================
def get_active_category() -> str:
    category = load_config().get("active_category")
    if category in CATEGORIES:
        return category
    return CATEGORIES[0]


def get_collection_total() -> int:
    return _int_setting("collection_total", minimum=0)


def get_reload_debounce_ms() -> int:
    return _int_setting("reload_debounce_ms", minimum=0)


def get_track_unit_px() -> int:
    return _int_setting("track_unit_px", minimum=1)


def get_steep_seconds() -> int:
    return _int_setting("steep_seconds", minimum=1)


def _int_setting(key: str, *, minimum: int) -> int:
    value = load_config().get(key, _DEFAULT_CONFIG[key])
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = int(_DEFAULT_CONFIG[key])
    return max(minimum, number)


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "save_active_category",
    "get_active_category",
    "get_collection_total",
    "get_reload_debounce_ms",
    "get_track_unit_px",
    "get_steep_seconds",
]
