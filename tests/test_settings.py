"""Unit tests for settings persistence."""

import json

import pytest
from textpane.settings import DEFAULTS, Settings, get_settings


@pytest.fixture
def settings(tmp_path):
    return Settings(config_dir=tmp_path)


def test_missing_file_gives_defaults(settings):
    assert settings.load() == DEFAULTS


def test_save_and_load(settings, tmp_path):
    assert settings.save({"wrap": False, "history_limit": 50})
    fresh = Settings(config_dir=tmp_path)
    loaded = fresh.load()
    assert loaded["wrap"] is False
    assert loaded["history_limit"] == 50
    assert loaded["queue_size"] == DEFAULTS["queue_size"]


def test_save_is_atomic(settings, tmp_path):
    settings.save({"overwrite": True})
    assert (tmp_path / "settings.json").exists()
    assert not (tmp_path / "settings.tmp").exists()


def test_corrupt_file_falls_back_to_defaults(settings, tmp_path):
    (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")
    assert settings.load() == DEFAULTS


def test_non_dict_file_is_ignored(settings, tmp_path):
    (tmp_path / "settings.json").write_text("[1, 2]", encoding="utf-8")
    assert settings.load() == DEFAULTS


def test_invalid_values_are_ignored(settings, tmp_path):
    data = {"wrap": "yes", "history_limit": 0, "queue_size": 8}
    (tmp_path / "settings.json").write_text(json.dumps(data), encoding="utf-8")
    loaded = settings.load()
    assert loaded["wrap"] == DEFAULTS["wrap"]
    assert loaded["history_limit"] == DEFAULTS["history_limit"]
    assert loaded["queue_size"] == 8


def test_saving_invalid_value_raises(settings):
    with pytest.raises(ValueError):
        settings.save({"queue_size": True})


def test_validate_setting(settings):
    assert settings.validate_setting("wrap", True)
    assert not settings.validate_setting("wrap", 1)
    assert settings.validate_setting("history_limit", 10)
    assert not settings.validate_setting("history_limit", -1)
    assert settings.validate_setting("future_option", "anything")


def test_load_is_cached(settings, tmp_path):
    settings.load()
    (tmp_path / "settings.json").write_text(json.dumps({"wrap": False}), encoding="utf-8")
    assert settings.get("wrap") == DEFAULTS["wrap"]
    settings.clear_cache()
    assert settings.get("wrap") is False


def test_get_settings_is_singleton():
    assert get_settings() is get_settings()
