from __future__ import annotations

from typing import Dict, Optional

from progression.levels import CATEGORY_COLORS

DEFAULT_COLOR = "#4a90e2"

_LIGHT_COLORS: Dict[str, str] = {
    "Green": "#C1D7B8",
    "Black": "#E5B5AD",
    "Oolong": "#E8D7BC",
    "White": "#F0F2EF",
    "Pu-erh": "#BDA99E",
    "Yellow": "#EEECD9",
}


def _normalize(category: Optional[str]) -> str:
    return (category or "").strip().upper().replace("-", "")


_BY_KEY = {_normalize(name): name for name in CATEGORY_COLORS}


def category_color(category: Optional[str], light: bool = False) -> str:
    """Theme color for a category; unknown or empty categories get the default."""
    name = _BY_KEY.get(_normalize(category))
    if name is None:
        return DEFAULT_COLOR
    if light:
        return _LIGHT_COLORS.get(name, DEFAULT_COLOR)
    return CATEGORY_COLORS[name]


def category_stylesheet(category: Optional[str]) -> str:
    base = category_color(category)
    light = category_color(category, light=True)
    return (
        f"QPushButton[active=\"true\"] {{ background-color: {base}; font-weight: bold; }}"
        f"QPushButton[active=\"false\"] {{ background-color: {light}; }}"
    )
