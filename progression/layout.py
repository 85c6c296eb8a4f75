from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .levels import LevelDefinition

MODE_EVEN = "even"
MODE_PROPORTIONAL = "proportional"

PROPORTIONAL_TOTAL_LIMIT = 100
EVEN_MAX_MILESTONES = 7
DEFAULT_UNIT_PX = 100
SYNTHETIC_STEP_SMALL = 25
SYNTHETIC_STEP_LARGE = 50
SYNTHETIC_LARGE_TOTAL = 200
SYNTHETIC_SKIP_RATIO = 0.2


@dataclass(frozen=True)
class Milestone:
    threshold: int
    label: str
    achieved: bool


@dataclass(frozen=True)
class PlacedMilestone:
    milestone: Milestone
    position: float


@dataclass(frozen=True)
class Segment:
    start: float
    width: float
    fill_percent: float

    @property
    def filled_width(self) -> float:
        return self.width * self.fill_percent / 100.0


@dataclass(frozen=True)
class TrackLayout:
    mode: str
    milestones: Tuple[PlacedMilestone, ...]
    segments: Tuple[Segment, ...]
    indicator: float
    count: int
    total: int
    track_width_px: Optional[int] = None

    @property
    def scrollable(self) -> bool:
        return self.mode == MODE_PROPORTIONAL

    @property
    def complete(self) -> bool:
        return self.total <= 0 or self.count >= self.total

    def track_width(self, viewport_px: int) -> int:
        if self.track_width_px is None:
            return viewport_px
        return max(viewport_px, self.track_width_px)


def build_milestones(levels: Sequence[LevelDefinition], count: int, total: int) -> List[Milestone]:
    """Start marker, one marker per level and, for large collections, numeric fillers."""
    milestones = [Milestone(threshold=0, label="Start", achieved=True)]
    for level in levels:
        milestones.append(
            Milestone(
                threshold=level.threshold,
                label=_short_label(level.title),
                achieved=count >= level.threshold,
            )
        )
    if total > PROPORTIONAL_TOTAL_LIMIT:
        step = SYNTHETIC_STEP_LARGE if total > SYNTHETIC_LARGE_TOTAL else SYNTHETIC_STEP_SMALL
        for value in range(step, total, step):
            nearby = any(abs(m.threshold - value) < step * SYNTHETIC_SKIP_RATIO for m in milestones)
            if not nearby:
                milestones.append(Milestone(threshold=value, label=str(value), achieved=count >= value))
        milestones.sort(key=lambda m: m.threshold)
    return milestones


def use_proportional(total: int, milestone_count: int) -> bool:
    return total > PROPORTIONAL_TOTAL_LIMIT or milestone_count > EVEN_MAX_MILESTONES


def segment_fill(count: int, prev: int, cur: int) -> float:
    if count >= cur:
        return 100.0
    if count <= prev or cur <= prev:
        return 0.0
    return (count - prev) / (cur - prev) * 100.0


def layout_milestones(
    milestones: Sequence[Milestone],
    count: int,
    total: int,
    unit_px: int = DEFAULT_UNIT_PX,
) -> TrackLayout:
    n = len(milestones)
    proportional = use_proportional(total, n)
    if proportional:
        positions = [_ratio(m.threshold, total) for m in milestones]
    else:
        positions = [_even_position(i, n) for i in range(n)]

    segments: List[Segment] = []
    for i in range(1, n):
        prev, cur = milestones[i - 1], milestones[i]
        start = positions[i - 1]
        segments.append(
            Segment(
                start=start,
                width=max(0.0, positions[i] - start),
                fill_percent=segment_fill(count, prev.threshold, cur.threshold),
            )
        )

    if proportional:
        indicator = _proportional_indicator(count, total)
    else:
        indicator = _even_indicator(count, total, milestones, positions)

    return TrackLayout(
        mode=MODE_PROPORTIONAL if proportional else MODE_EVEN,
        milestones=tuple(PlacedMilestone(m, p) for m, p in zip(milestones, positions)),
        segments=tuple(segments),
        indicator=_clamp(indicator),
        count=count,
        total=total,
        track_width_px=max(unit_px, n * unit_px) if proportional else None,
    )


def layout_for_levels(
    levels: Sequence[LevelDefinition],
    count: int,
    total: int,
    unit_px: int = DEFAULT_UNIT_PX,
) -> TrackLayout:
    return layout_milestones(build_milestones(levels, count, total), count, total, unit_px)


def _proportional_indicator(count: int, total: int) -> float:
    if total <= 0 or count >= total:
        return 100.0
    if count <= 0:
        return 0.0
    return count / total * 100.0


def _even_indicator(
    count: int,
    total: int,
    milestones: Sequence[Milestone],
    positions: Sequence[float],
) -> float:
    if total <= 0 or count >= total:
        return 100.0
    if count <= 0:
        return 0.0
    for i in range(1, len(milestones)):
        prev, cur = milestones[i - 1].threshold, milestones[i].threshold
        if prev <= count <= cur:
            start, end = positions[i - 1], positions[i]
            return start + segment_fill(count, prev, cur) / 100.0 * (end - start)
    # beyond the last marker
    return 100.0


def _even_position(index: int, count: int) -> float:
    if count <= 1:
        return 0.0
    return index / (count - 1) * 100.0


def _ratio(value: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return _clamp(value / total * 100.0)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def _short_label(title: str) -> str:
    words = title.split()
    return words[-1] if words else title
