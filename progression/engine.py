from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .levels import (
    COLLECTION_MILESTONES,
    DEFAULT_BADGES,
    DEFAULT_LEVEL_TABLE,
    SPECIAL_BADGES,
    Badge,
    CollectionMilestone,
    LevelDefinition,
    LevelTable,
    SpecialBadge,
)

UNKNOWN_CATEGORY_TITLE = "Unknown Category"


@dataclass(frozen=True)
class ProgressSnapshot:
    category: str
    collected_count: int
    current_level: LevelDefinition
    next_level: Optional[LevelDefinition]
    progress_message: str
    is_complete: bool


@dataclass(frozen=True)
class LevelUpInfo:
    category: str
    level: LevelDefinition
    badges: Tuple[Badge, ...]
    message: str


class ProgressionEngine:
    """Pure mapping from (category, collected count) to rank information.

    Holds nothing but the static level table and badge catalog, so every
    call with the same inputs returns equal results.
    """

    def __init__(
        self,
        table: LevelTable = DEFAULT_LEVEL_TABLE,
        badges: Optional[Mapping[str, Sequence[Badge]]] = None,
        milestones: Sequence[CollectionMilestone] = COLLECTION_MILESTONES,
        special_badges: Sequence[SpecialBadge] = SPECIAL_BADGES,
    ) -> None:
        self._table = table
        source = DEFAULT_BADGES if badges is None else badges
        self._badges: Dict[str, Tuple[Badge, ...]] = {
            category: tuple(sorted(items, key=lambda badge: badge.level))
            for category, items in source.items()
        }
        self._milestones = tuple(sorted(milestones, key=lambda item: item.threshold))
        self._special = {badge.id: badge for badge in special_badges}

    @property
    def table(self) -> LevelTable:
        return self._table

    def categories(self) -> List[str]:
        return self._table.categories()

    def get_current_level(self, category: str, count: int) -> LevelDefinition:
        levels = self._table.levels(category)
        if not levels:
            return _unknown_level()
        count = _clamp_count(count)
        for level in reversed(levels):
            if count >= level.threshold:
                return level
        return _beginner_level(category, levels[0])

    def get_next_level(self, category: str, count: int) -> Optional[LevelDefinition]:
        count = _clamp_count(count)
        for level in self._table.levels(category):
            if count < level.threshold:
                return level
        return None

    def get_collection_progress(self, category: str, count: int) -> ProgressSnapshot:
        if category not in self._table:
            return ProgressSnapshot(
                category=category,
                collected_count=0,
                current_level=_unknown_level(),
                next_level=None,
                progress_message="Unknown tea category",
                is_complete=False,
            )
        count = _clamp_count(count)
        current = self.get_current_level(category, count)
        nxt = self.get_next_level(category, count)
        return ProgressSnapshot(
            category=category,
            collected_count=count,
            current_level=current,
            next_level=nxt,
            progress_message=progress_message(category, count, nxt),
            is_complete=nxt is None,
        )

    def get_category_badges(self, category: str, count: int) -> List[Badge]:
        count = _clamp_count(count)
        return [badge for badge in self._badges.get(category, ()) if count >= badge.level]

    def check_level_up(self, category: str, old_count: int, new_count: int) -> Optional[LevelUpInfo]:
        """Report the lowest threshold crossed by the move, if any."""
        crossings = self.check_level_ups(category, old_count, new_count)
        return crossings[0] if crossings else None

    def check_level_ups(self, category: str, old_count: int, new_count: int) -> List[LevelUpInfo]:
        """Report every threshold in ``(old_count, new_count]`` in ascending order."""
        crossed: List[LevelUpInfo] = []
        for level in self._table.levels(category):
            if old_count < level.threshold <= new_count:
                earned = tuple(
                    badge
                    for badge in self._badges.get(category, ())
                    if badge.level == level.threshold
                )
                crossed.append(
                    LevelUpInfo(
                        category=category,
                        level=level,
                        badges=earned,
                        message=f"Congratulations! You've reached {level.title}!",
                    )
                )
        return crossed

    def check_milestones(self, total_count: int, previous_total: int) -> Optional[CollectionMilestone]:
        for milestone in self._milestones:
            if previous_total < milestone.threshold <= total_count:
                return milestone
        return None

    def check_special_badges(self, counts: Mapping[str, int]) -> List[SpecialBadge]:
        awarded: List[SpecialBadge] = []
        categories = self._table.categories()
        diverse = self._special.get("all-categories")
        if diverse and categories and all(counts.get(cat, 0) >= 1 for cat in categories):
            awarded.append(diverse)
        completionist = self._special.get("full-category")
        if completionist and any(
            counts.get(cat, 0) >= self._table.max_threshold(cat) > 0 for cat in categories
        ):
            awarded.append(completionist)
        return awarded


def progress_message(category: str, count: int, next_level: Optional[LevelDefinition]) -> str:
    if next_level is None:
        return f"Congratulations! You have completed your {category} Tea collection with {count} teas!"
    remaining = next_level.threshold - count
    plural = "s" if remaining > 1 else ""
    return (
        f"You have collected {count} out of {next_level.threshold} teas needed to become "
        f"a {next_level.title}. {remaining} more {category} tea{plural} to go!"
    )


def _beginner_level(category: str, first: LevelDefinition) -> LevelDefinition:
    return LevelDefinition(
        threshold=0,
        title=f"{category} Tea Beginner",
        message=f"Start your {category} tea collection journey!",
        next_level_message=f"{first.threshold} {category.lower()} teas to reach {first.title}.",
    )


def _unknown_level() -> LevelDefinition:
    return LevelDefinition(threshold=0, title=UNKNOWN_CATEGORY_TITLE, message="Unknown tea category")


def _clamp_count(count: int) -> int:
    try:
        value = int(count)
    except (TypeError, ValueError):
        return 0
    return max(0, value)
