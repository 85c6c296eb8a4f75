import json
from pathlib import Path

import pytest

from app_ui import config as ui_config


@pytest.fixture()
def config_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "roaming" / "teashelf_config.json"
    monkeypatch.setattr(ui_config, "CONFIG_PATH", path)
    return path


def test_missing_config_is_created_with_defaults(config_path: Path) -> None:
    data = ui_config.load_config()
    assert config_path.exists()
    assert data["active_category"] == "Green"
    assert ui_config.get_collection_total() == 52
    assert ui_config.get_reload_debounce_ms() == 300
    assert ui_config.get_track_unit_px() == 100
    assert ui_config.get_steep_seconds() == 180


def test_corrupt_config_falls_back(config_path: Path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[broken", encoding="utf-8")
    assert ui_config.load_config()["collection_total"] == 52


def test_missing_keys_and_bad_values(config_path: Path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        json.dumps({"active_category": "Rooibos", "collection_total": "lots", "track_unit_px": -4}),
        encoding="utf-8",
    )
    assert ui_config.get_active_category() == "Green"
    assert ui_config.get_collection_total() == 52
    assert ui_config.get_track_unit_px() == 1
    assert ui_config.get_steep_seconds() == 180


def test_save_active_category(config_path: Path) -> None:
    ui_config.save_active_category("Oolong")
    assert ui_config.get_active_category() == "Oolong"
    ui_config.save_active_category("Rooibos")
    assert ui_config.get_active_category() == "Oolong"
