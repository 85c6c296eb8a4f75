from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

CATEGORIES: Tuple[str, ...] = ("Green", "Black", "Oolong", "White", "Pu-erh", "Yellow")
TIER_THRESHOLDS: Tuple[int, ...] = (4, 8, 12, 20, 28, 36, 44, 52)


@dataclass(frozen=True)
class LevelDefinition:
    threshold: int
    title: str
    message: str
    next_level_message: Optional[str] = None


@dataclass(frozen=True)
class Badge:
    level: int
    name: str
    icon: str
    color: str


@dataclass(frozen=True)
class CollectionMilestone:
    threshold: int
    name: str
    icon: str
    description: str


@dataclass(frozen=True)
class SpecialBadge:
    id: str
    name: str
    icon: str
    description: str


class LevelTable:
    """Immutable category -> ascending level definitions mapping."""

    def __init__(self, tables: Mapping[str, Iterable[LevelDefinition]]) -> None:
        self._tables: Dict[str, Tuple[LevelDefinition, ...]] = {}
        for category, levels in tables.items():
            ordered = tuple(levels)
            _validate(category, ordered)
            self._tables[category] = ordered

    def __contains__(self, category: object) -> bool:
        return category in self._tables

    def categories(self) -> List[str]:
        return list(self._tables.keys())

    def levels(self, category: str) -> Tuple[LevelDefinition, ...]:
        return self._tables.get(category, ())

    def max_threshold(self, category: str) -> int:
        levels = self.levels(category)
        return levels[-1].threshold if levels else 0


def _validate(category: str, levels: Sequence[LevelDefinition]) -> None:
    previous = -1
    for level in levels:
        if level.threshold < 0:
            raise ValueError(f"{category}: negative threshold {level.threshold}")
        if level.threshold <= previous:
            raise ValueError(
                f"{category}: thresholds must be strictly increasing ({previous} -> {level.threshold})"
            )
        previous = level.threshold


# (title, message) per tier; the next-level message is derived from the following tier.
_TIER_TEXT: Dict[str, List[Tuple[str, str]]] = {
    "Green": [
        ("Green Tea Sprout", "Your first steps into the verdant world of green tea!"),
        ("Green Tea Sapling", "Your green tea collection is taking root!"),
        ("Green Tea Explorer", "You're navigating the diverse landscape of green teas!"),
        ("Green Tea Connoisseur", "Your palate is becoming refined in the art of green tea!"),
        ("Green Tea Master", "You've achieved mastery in the world of green teas!"),
        ("Green Tea Artisan", "Your green tea expertise is approaching legendary depths!"),
        ("Green Tea Gongfu Grand Master", "You are the ultimate Green Tea Legend!"),
        ("Green Tea Collection Complete", "You've achieved the pinnacle of green tea mastery!"),
    ],
    "Oolong": [
        ("Oolong Apprentice", "Your first steps into the nuanced world of oolong!"),
        ("Oolong Learner", "You're discovering the complexity of oolong teas!"),
        ("Oolong Explorer", "The diverse world of oolong is opening up to you!"),
        ("Oolong Specialist", "Your understanding of oolong's intricate flavors is deepening!"),
        ("Oolong Master", "You've conquered the art of oolong tea!"),
        ("Oolong Artisan", "Your oolong expertise is approaching legendary depths!"),
        ("Oolong Gongfu Grand Master", "You are the ultimate Oolong Tea Legend!"),
        ("Oolong Collection Complete", "You've achieved the pinnacle of oolong mastery!"),
    ],
    "Black": [
        ("Black Tea Novice", "Your bold journey into black teas begins!"),
        ("Black Tea Enthusiast", "Your appreciation for robust black teas is growing!"),
        ("Black Tea Explorer", "You're uncovering the rich world of black teas!"),
        ("Black Tea Connoisseur", "Your palate is becoming sophisticated in black tea nuances!"),
        ("Black Tea Master", "You've mastered the depth of black teas!"),
        ("Black Tea Artisan", "Your black tea expertise is approaching legendary depths!"),
        ("Black Tea Gongfu Grand Master", "You are the ultimate Black Tea Legend!"),
        ("Black Tea Collection Complete", "You've achieved the pinnacle of black tea mastery!"),
    ],
    "White": [
        ("White Tea Initiate", "Your delicate journey into white teas begins!"),
        ("White Tea Learner", "You're discovering the subtle world of white teas!"),
        ("White Tea Explorer", "The gentle realm of white teas is unfolding before you!"),
        ("White Tea Connoisseur", "Your appreciation for white tea's delicate nature is deepening!"),
        ("White Tea Master", "You've achieved mastery in the art of white teas!"),
        ("White Tea Artisan", "Your white tea expertise is approaching legendary depths!"),
        ("White Tea Gongfu Grand Master", "You are the ultimate White Tea Legend!"),
        ("White Tea Collection Complete", "You've achieved the pinnacle of white tea mastery!"),
    ],
    "Pu-erh": [
        ("Pu-erh Novice", "Your journey into the world of aged teas begins!"),
        ("Pu-erh Apprentice", "You're exploring the complex world of pu-erh!"),
        ("Pu-erh Explorer", "The mysterious world of aged teas is opening up to you!"),
        ("Pu-erh Specialist", "Your understanding of pu-erh's depth is growing!"),
        ("Pu-erh Master", "You've unlocked the secrets of pu-erh tea!"),
        ("Pu-erh Artisan", "Your pu-erh expertise is approaching legendary depths!"),
        ("Pu-erh Gongfu Grand Master", "You are the ultimate Pu-erh Tea Legend!"),
        ("Pu-erh Collection Complete", "You've achieved the pinnacle of pu-erh mastery!"),
    ],
    "Yellow": [
        ("Yellow Tea Initiate", "Your rare journey into the world of yellow teas begins!"),
        ("Yellow Tea Learner", "You're discovering the subtle world of yellow teas!"),
        ("Yellow Tea Explorer", "The gentle realm of yellow teas is unfolding before you!"),
        ("Yellow Tea Connoisseur", "Your appreciation for yellow tea's delicate nature is deepening!"),
        ("Yellow Tea Master", "You've achieved mastery in the art of yellow teas!"),
        ("Yellow Tea Artisan", "Your yellow tea expertise is approaching legendary depths!"),
        ("Yellow Tea Gongfu Grand Master", "You are the ultimate Yellow Tea Legend!"),
        ("Yellow Tea Collection Complete", "You've achieved the pinnacle of yellow tea mastery!"),
    ],
}

CATEGORY_COLORS: Dict[str, str] = {
    "Green": "#7B9070",
    "Black": "#A56256",
    "Oolong": "#C09565",
    "White": "#D8DCD5",
    "Pu-erh": "#6F5244",
    "Yellow": "#D1CDA6",
}

# (level, name, icon) per badge
_BADGE_DEFS: Dict[str, List[Tuple[int, str, str]]] = {
    "Green": [(4, "Green Sprout", "🌱"), (12, "Green Explorer", "🌿"), (28, "Green Master", "🍃"), (52, "Green Legend", "🏆")],
    "Black": [(4, "Black Novice", "🔥"), (12, "Black Explorer", "🌋"), (28, "Black Master", "⚫"), (52, "Black Legend", "🏆")],
    "Oolong": [(4, "Oolong Apprentice", "🌊"), (12, "Oolong Explorer", "🧭"), (28, "Oolong Master", "🌀"), (52, "Oolong Legend", "🏆")],
    "White": [(4, "White Initiate", "❄️"), (12, "White Explorer", "🌨️"), (28, "White Master", "⚪"), (52, "White Legend", "🏆")],
    "Pu-erh": [(4, "Pu-erh Novice", "🍂"), (12, "Pu-erh Explorer", "⏳"), (28, "Pu-erh Master", "🏺"), (52, "Pu-erh Legend", "🏆")],
    "Yellow": [(4, "Yellow Initiate", "🌞"), (12, "Yellow Explorer", "🌟"), (28, "Yellow Master", "⭐"), (52, "Yellow Legend", "🏆")],
}

COLLECTION_MILESTONES: Tuple[CollectionMilestone, ...] = (
    CollectionMilestone(10, "Tea Enthusiast", "🍵", "Collected 10 teas"),
    CollectionMilestone(25, "Tea Aficionado", "📚", "Collected 25 teas"),
    CollectionMilestone(50, "Tea Scholar", "🧠", "Collected 50 teas"),
    CollectionMilestone(100, "Tea Sage", "👑", "Collected 100 teas"),
    CollectionMilestone(200, "Tea Grandmaster", "🌠", "Collected 200 teas"),
)

SPECIAL_BADGES: Tuple[SpecialBadge, ...] = (
    SpecialBadge("all-categories", "Diverse Palette", "🌈", "Collect at least one tea from each category"),
    SpecialBadge("full-category", "Completionist", "✅", "Complete any tea category collection"),
    SpecialBadge("brew-master", "Brew Master", "⏱️", "Brew 50 perfect cups of tea"),
    SpecialBadge("tea-journey", "Tea Journey", "🗺️", "Collect teas from 10 different regions"),
)


# wording of the step from tier i to tier i + 1
_NEXT_LEVEL_PHRASES: Tuple[str, ...] = (
    "to become {article} {title}.",
    "to reach {title} status.",
    "to become {article} {title}.",
    "to unlock the {title} level.",
    "to reach Artisan status.",
    "to become a Gongfu Grand Master.",
    "to complete your ultimate collection.",
)


def _next_message(category: str, remaining: int, step: int, next_title: str) -> str:
    noun = f"{category.lower()} tea{'s' if remaining != 1 else ''}"
    article = "an" if next_title[:1].upper() in "AEIOU" else "a"
    phrase = _NEXT_LEVEL_PHRASES[min(step, len(_NEXT_LEVEL_PHRASES) - 1)]
    return f"{remaining} more {noun} " + phrase.format(article=article, title=next_title)


def _build_levels(category: str) -> List[LevelDefinition]:
    tiers = _TIER_TEXT[category]
    levels: List[LevelDefinition] = []
    for index, (threshold, (title, message)) in enumerate(zip(TIER_THRESHOLDS, tiers)):
        next_message = None
        if index + 1 < len(tiers):
            next_threshold = TIER_THRESHOLDS[index + 1]
            remaining = next_threshold - threshold
            next_message = _next_message(category, remaining, index, tiers[index + 1][0])
        levels.append(LevelDefinition(threshold, title, message, next_message))
    return levels


def build_default_table() -> LevelTable:
    return LevelTable({category: _build_levels(category) for category in CATEGORIES})


def build_default_badges() -> Dict[str, Tuple[Badge, ...]]:
    return {
        category: tuple(
            Badge(level=level, name=name, icon=icon, color=CATEGORY_COLORS[category])
            for level, name, icon in defs
        )
        for category, defs in _BADGE_DEFS.items()
    }


DEFAULT_LEVEL_TABLE = build_default_table()
DEFAULT_BADGES = build_default_badges()

__all__ = [
    "CATEGORIES",
    "TIER_THRESHOLDS",
    "CATEGORY_COLORS",
    "LevelDefinition",
    "Badge",
    "CollectionMilestone",
    "SpecialBadge",
    "LevelTable",
    "COLLECTION_MILESTONES",
    "SPECIAL_BADGES",
    "DEFAULT_LEVEL_TABLE",
    "DEFAULT_BADGES",
    "build_default_table",
    "build_default_badges",
]
