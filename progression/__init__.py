"""Collection levels, badge awards and milestone track layout."""

from .engine import LevelUpInfo, ProgressionEngine, ProgressSnapshot
from .layout import Milestone, TrackLayout, build_milestones, layout_for_levels, layout_milestones
from .levels import CATEGORIES, Badge, LevelDefinition, LevelTable

__all__ = [
    "CATEGORIES",
    "Badge",
    "LevelDefinition",
    "LevelTable",
    "LevelUpInfo",
    "ProgressionEngine",
    "ProgressSnapshot",
    "Milestone",
    "TrackLayout",
    "build_milestones",
    "layout_for_levels",
    "layout_milestones",
]
