import pytest

from progression.engine import ProgressionEngine
from progression.levels import (
    CATEGORIES,
    DEFAULT_LEVEL_TABLE,
    Badge,
    LevelDefinition,
    LevelTable,
)


@pytest.fixture()
def engine() -> ProgressionEngine:
    return ProgressionEngine()


@pytest.fixture()
def small_engine() -> ProgressionEngine:
    table = LevelTable(
        {
            "Green": [
                LevelDefinition(4, "Green Tea Sprout", "first", "4 more green teas to reach Green Tea Sapling."),
                LevelDefinition(8, "Green Tea Sapling", "second", None),
            ]
        }
    )
    badges = {"Green": [Badge(4, "Green Sprout", "🌱", "#7B9070")]}
    return ProgressionEngine(table, badges)


def test_current_level_never_none(engine: ProgressionEngine) -> None:
    for category in CATEGORIES:
        for count in range(0, 60):
            assert engine.get_current_level(category, count) is not None


def test_beginner_level_below_first_threshold(engine: ProgressionEngine) -> None:
    level = engine.get_current_level("Green", 3)
    assert level.threshold == 0
    assert level.title == "Green Tea Beginner"
    assert level.next_level_message == "4 green teas to reach Green Tea Sprout."


def test_next_level_none_iff_at_or_above_max(engine: ProgressionEngine) -> None:
    for category in CATEGORIES:
        top = DEFAULT_LEVEL_TABLE.max_threshold(category)
        for count in range(0, top + 5):
            assert (engine.get_next_level(category, count) is None) == (count >= top)


def test_current_level_is_monotonic(engine: ProgressionEngine) -> None:
    for category in CATEGORIES:
        previous = -1
        for count in range(0, 60):
            threshold = engine.get_current_level(category, count).threshold
            assert threshold >= previous
            previous = threshold


def test_progress_scenario_green_five(small_engine: ProgressionEngine) -> None:
    snapshot = small_engine.get_collection_progress("Green", 5)
    assert snapshot.current_level.threshold == 4
    assert snapshot.next_level is not None and snapshot.next_level.threshold == 8
    assert "3 more Green teas" in snapshot.progress_message
    assert snapshot.is_complete is False


def test_progress_scenario_green_eight(small_engine: ProgressionEngine, engine: ProgressionEngine) -> None:
    done = small_engine.get_collection_progress("Green", 8)
    assert done.next_level is None
    assert done.is_complete is True
    assert done.progress_message.startswith("Congratulations!")

    ongoing = engine.get_collection_progress("Green", 8)
    assert ongoing.next_level is not None and ongoing.next_level.threshold == 12
    assert ongoing.is_complete == (ongoing.next_level is None)


def test_progress_message_singular(small_engine: ProgressionEngine) -> None:
    snapshot = small_engine.get_collection_progress("Green", 7)
    assert "1 more Green tea to go!" in snapshot.progress_message


def test_progress_is_idempotent(engine: ProgressionEngine) -> None:
    assert engine.get_collection_progress("Oolong", 13) == engine.get_collection_progress("Oolong", 13)


def test_unknown_category_snapshot(engine: ProgressionEngine) -> None:
    snapshot = engine.get_collection_progress("Rooibos", 10)
    assert snapshot.current_level.title == "Unknown Category"
    assert snapshot.next_level is None
    assert snapshot.is_complete is False
    assert snapshot.collected_count == 0
    assert engine.get_current_level("Rooibos", 3).title == "Unknown Category"
    assert engine.get_category_badges("Rooibos", 100) == []
    assert engine.check_level_up("Rooibos", 0, 100) is None


def test_negative_count_is_clamped(engine: ProgressionEngine) -> None:
    snapshot = engine.get_collection_progress("Black", -3)
    assert snapshot.collected_count == 0
    assert snapshot.current_level.threshold == 0


def test_check_level_up_no_change(engine: ProgressionEngine) -> None:
    for count in range(0, 60):
        assert engine.check_level_up("Green", count, count) is None


def test_check_level_up_single_crossing(small_engine: ProgressionEngine) -> None:
    info = small_engine.check_level_up("Green", 3, 4)
    assert info is not None
    assert info.level.threshold == 4
    assert [badge.name for badge in info.badges] == ["Green Sprout"]
    assert info.message == "Congratulations! You've reached Green Tea Sprout!"
    assert small_engine.check_level_up("Green", 4, 5) is None


def test_check_level_up_reports_lowest_crossing(engine: ProgressionEngine) -> None:
    info = engine.check_level_up("White", 0, 13)
    assert info is not None
    assert info.level.threshold == 4
    all_crossings = engine.check_level_ups("White", 0, 13)
    assert [item.level.threshold for item in all_crossings] == [4, 8, 12]
    assert [badge.level for badge in all_crossings[2].badges] == [12]


def test_category_badges_are_cumulative(engine: ProgressionEngine) -> None:
    assert engine.get_category_badges("Pu-erh", 3) == []
    names = [badge.name for badge in engine.get_category_badges("Pu-erh", 30)]
    assert names == ["Pu-erh Novice", "Pu-erh Explorer", "Pu-erh Master"]


def test_check_milestones(engine: ProgressionEngine) -> None:
    milestone = engine.check_milestones(10, 9)
    assert milestone is not None and milestone.name == "Tea Enthusiast"
    assert engine.check_milestones(11, 10) is None
    assert engine.check_milestones(60, 0).threshold == 10


def test_special_badges(engine: ProgressionEngine) -> None:
    assert engine.check_special_badges({}) == []
    every = {category: 1 for category in CATEGORIES}
    assert [badge.id for badge in engine.check_special_badges(every)] == ["all-categories"]
    full = {"Green": 52}
    assert [badge.id for badge in engine.check_special_badges(full)] == ["full-category"]


def test_table_rejects_unordered_thresholds() -> None:
    with pytest.raises(ValueError):
        LevelTable({"Green": [LevelDefinition(8, "b", "b"), LevelDefinition(4, "a", "a")]})
    with pytest.raises(ValueError):
        LevelTable({"Green": [LevelDefinition(4, "a", "a"), LevelDefinition(4, "b", "b")]})


def test_default_table_messages() -> None:
    green = DEFAULT_LEVEL_TABLE.levels("Green")
    assert [level.threshold for level in green] == [4, 8, 12, 20, 28, 36, 44, 52]
    assert green[0].next_level_message == "4 more green teas to become a Green Tea Sapling."
    assert green[1].next_level_message == "4 more green teas to reach Green Tea Explorer status."
    assert green[3].next_level_message == "8 more green teas to unlock the Green Tea Master level."
    assert green[4].next_level_message == "8 more green teas to reach Artisan status."
    assert green[5].next_level_message == "8 more green teas to become a Gongfu Grand Master."
    assert green[-2].next_level_message == "8 more green teas to complete your ultimate collection."
    assert green[-1].next_level_message is None


def test_default_messages_pick_article() -> None:
    oolong = DEFAULT_LEVEL_TABLE.levels("Oolong")
    assert oolong[0].next_level_message == "4 more oolong teas to become an Oolong Learner."
    assert oolong[2].next_level_message == "8 more oolong teas to become an Oolong Specialist."
    black = DEFAULT_LEVEL_TABLE.levels("Black")
    assert black[0].next_level_message == "4 more black teas to become a Black Tea Enthusiast."
