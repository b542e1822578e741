from pathlib import Path

import pytest

from author_ally.config import (
    AuthorAllyConfig,
    TipThresholds,
    config_from_dict,
    config_from_yaml,
    load_config,
)


def test_config_from_dict_ignores_unknown_keys():
    cfg = config_from_dict(
        {"words_per_minute": 250, "tips": {"word_count": 100, "bogus": 1}, "extra": True}
    )
    assert cfg.words_per_minute == 250
    assert cfg.tips == TipThresholds(word_count=100)
    assert config_from_dict(None) == AuthorAllyConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "count_spaces: false\nstore_backend: memory\ntips:\n  readability: 50\n",
        encoding="utf-8",
    )
    cfg = config_from_yaml(path)
    assert cfg.count_spaces is False
    assert cfg.store_backend == "memory"
    assert cfg.tips.readability == 50
    assert load_config(path) == cfg
    assert load_config() == AuthorAllyConfig()


def test_config_yaml_must_be_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


@pytest.mark.parametrize(
    "tips",
    [
        {"readability": "high"},
        {"writing_pace": -1},
        {"word_count": True},
        {"readability": None},
    ],
)
def test_tip_thresholds_reject_invalid_values(tips: dict):
    with pytest.raises(ValueError):
        config_from_dict({"tips": tips})


@pytest.mark.parametrize("wpm", [0, -5, "fast", 2.5, False])
def test_config_rejects_invalid_reading_speed(wpm):
    with pytest.raises(ValueError):
        config_from_dict({"words_per_minute": wpm})


def test_tip_thresholds_accept_ints_and_floats():
    tips = config_from_dict({"tips": {"readability": 45, "writing_pace": 7.5}}).tips
    assert tips.readability == 45
    assert tips.writing_pace == 7.5
