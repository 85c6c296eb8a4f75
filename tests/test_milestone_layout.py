import pytest

from progression.layout import (
    MODE_EVEN,
    MODE_PROPORTIONAL,
    Milestone,
    build_milestones,
    layout_for_levels,
    layout_milestones,
    segment_fill,
    use_proportional,
)
from progression.levels import DEFAULT_LEVEL_TABLE, LevelDefinition


def _levels(*thresholds: int):
    return [LevelDefinition(t, f"Tea Level{t}", "msg") for t in thresholds]


def test_start_milestone_always_present_and_achieved() -> None:
    milestones = build_milestones(_levels(4, 8), count=0, total=8)
    assert milestones[0] == Milestone(threshold=0, label="Start", achieved=True)
    assert [m.achieved for m in milestones[1:]] == [False, False]
    assert milestones[1].label == "Level4"


def test_mode_selection() -> None:
    assert use_proportional(101, 3)
    assert use_proportional(52, 8)
    assert not use_proportional(100, 7)


def test_even_spacing_positions() -> None:
    layout = layout_for_levels(_levels(4, 8, 12), count=6, total=12)
    assert layout.mode == MODE_EVEN
    assert [p.position for p in layout.milestones] == pytest.approx([0.0, 100 / 3, 200 / 3, 100.0])
    assert layout.track_width_px is None
    assert layout.track_width(320) == 320


def test_even_indicator_matches_segment_fill() -> None:
    layout = layout_for_levels(_levels(4, 8, 12), count=6, total=12)
    fills = [segment.fill_percent for segment in layout.segments]
    assert fills == [100.0, 50.0, 0.0]
    bracket = layout.segments[1]
    assert abs(layout.indicator - (bracket.start + bracket.filled_width)) < 1e-9


def test_proportional_positions_and_width() -> None:
    layout = layout_for_levels(DEFAULT_LEVEL_TABLE.levels("Green"), count=13, total=52, unit_px=100)
    assert layout.mode == MODE_PROPORTIONAL
    assert layout.scrollable
    assert layout.milestones[1].position == 4 / 52 * 100
    assert layout.milestones[-1].position == 100.0
    assert layout.indicator == 13 / 52 * 100
    assert layout.track_width_px == 900
    assert layout.track_width(1200) == 1200


def test_positions_sorted_and_bounded() -> None:
    for total in (0, 10, 52, 150, 260):
        for count in (-5, 0, 3, 30, 52, 400):
            layout = layout_for_levels(DEFAULT_LEVEL_TABLE.levels("Oolong"), count, total)
            positions = [p.position for p in layout.milestones]
            assert positions == sorted(positions)
            assert all(0.0 <= value <= 100.0 for value in positions)
            assert 0.0 <= layout.indicator <= 100.0
            for segment in layout.segments:
                assert 0.0 <= segment.fill_percent <= 100.0


def test_segment_fill_rules() -> None:
    assert segment_fill(8, 4, 8) == 100.0
    assert segment_fill(4, 4, 8) == 0.0
    assert segment_fill(2, 4, 8) == 0.0
    assert segment_fill(6, 4, 8) == 50.0
    assert segment_fill(3, 5, 5) == 0.0


def test_indicator_edges() -> None:
    start = layout_for_levels(_levels(4, 8), count=0, total=8)
    assert start.indicator == 0.0
    done = layout_for_levels(_levels(4, 8), count=9, total=8)
    assert done.indicator == 100.0
    assert done.complete


def test_zero_total_is_guarded() -> None:
    layout = layout_for_levels(_levels(4, 8), count=0, total=0)
    assert layout.indicator == 100.0
    assert layout.complete
    many = layout_for_levels(DEFAULT_LEVEL_TABLE.levels("Green"), count=3, total=0)
    assert many.mode == MODE_PROPORTIONAL
    assert all(p.position == 0.0 for p in many.milestones)


def test_even_indicator_beyond_last_marker_is_clamped() -> None:
    layout = layout_milestones(build_milestones(_levels(4, 8), 10, 20), count=10, total=20)
    assert layout.mode == MODE_EVEN
    assert layout.indicator == 100.0


def test_synthetic_milestones_for_large_totals() -> None:
    milestones = build_milestones(DEFAULT_LEVEL_TABLE.levels("Green"), count=80, total=150)
    thresholds = [m.threshold for m in milestones]
    assert thresholds == sorted(thresholds)
    # 25 is within 5 of the 28 tier, 50 within 5 of 52
    assert 25 not in thresholds
    assert 50 not in thresholds
    assert 75 in thresholds and 100 in thresholds and 125 in thresholds
    assert next(m for m in milestones if m.threshold == 75).achieved
    assert next(m for m in milestones if m.threshold == 100).label == "100"


def test_synthetic_step_widens_above_two_hundred() -> None:
    thresholds = [m.threshold for m in build_milestones(_levels(4, 8), count=0, total=260)]
    assert thresholds == [0, 4, 8, 50, 100, 150, 200, 250]


def test_small_totals_get_no_synthetic_milestones() -> None:
    thresholds = [m.threshold for m in build_milestones(_levels(4, 8), count=0, total=100)]
    assert thresholds == [0, 4, 8]
