"""Tests for the config module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from hiitflow.config import (
    BUILTIN_PRESETS,
    delete_preset,
    get_preset,
    list_presets,
    load_config,
    save_config,
    save_preset,
    set_options,
)
from hiitflow.models import AppConfig, WorkoutConfig


@pytest.fixture(autouse=True)
def _tmp_config(tmp_path: Path):
    """Redirect config dir/file to tmp_path."""
    cfg_dir = tmp_path / "config"
    cfg_file = cfg_dir / "config.json"
    with patch("hiitflow.config._CONFIG_DIR", cfg_dir), patch(
        "hiitflow.config._CONFIG_FILE", cfg_file
    ):
        yield cfg_file


LEGS = WorkoutConfig(prep=5, sets=6, work=45, rest=15, cooldown=120)


class TestLoadSaveConfig:
    def test_load_default_when_missing(self) -> None:
        config = load_config()
        assert config.sound is True
        assert config.presets == {}

    def test_save_and_load_roundtrip(self) -> None:
        path = save_config(AppConfig(sound=False, presets={"legs": LEGS}))
        assert path.exists()

        loaded = load_config()
        assert loaded.sound is False
        assert loaded.presets["legs"] == LEGS

    def test_load_handles_corrupt_file(self, _tmp_config: Path) -> None:
        _tmp_config.parent.mkdir(parents=True, exist_ok=True)
        _tmp_config.write_text("not valid json{{{")
        assert load_config() == AppConfig()

    def test_load_handles_out_of_range_preset(self, _tmp_config: Path) -> None:
        _tmp_config.parent.mkdir(parents=True, exist_ok=True)
        _tmp_config.write_text(
            '{"presets": {"bad": {"prep": 0, "sets": 1, "work": 1, "rest": 1}}}'
        )
        assert load_config() == AppConfig()


class TestPresets:
    def test_builtin_tabata(self) -> None:
        tabata = get_preset("tabata")
        assert tabata == WorkoutConfig(prep=10, sets=8, work=20, rest=10, cooldown=60)

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_preset("  Tabata ") == BUILTIN_PRESETS["tabata"]

    def test_unknown(self) -> None:
        assert get_preset("marathon") is None

    def test_save_and_get(self) -> None:
        save_preset("Legs", LEGS)
        assert get_preset("legs") == LEGS
        assert set(list_presets()) == {"tabata", "legs"}

    def test_user_preset_shadows_builtin(self) -> None:
        save_preset("tabata", LEGS)
        assert get_preset("tabata") == LEGS

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            save_preset("   ", LEGS)

    def test_delete(self) -> None:
        save_preset("legs", LEGS)
        assert delete_preset("legs") is True
        assert get_preset("legs") is None

    def test_delete_missing(self) -> None:
        assert delete_preset("legs") is False

    def test_builtin_cannot_be_deleted(self) -> None:
        assert delete_preset("tabata") is False
        assert get_preset("tabata") is not None


class TestOptions:
    def test_set_sound(self) -> None:
        config = set_options(sound=False)
        assert config.sound is False
        assert config.keep_awake is True
        assert load_config().sound is False

    def test_set_keep_awake(self) -> None:
        set_options(keep_awake=False)
        assert load_config().keep_awake is False
