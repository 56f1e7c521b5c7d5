"""Tests for the settings store."""
import json

import pytest

from orchestrator.config import PropertyStore, Settings
from orchestrator.errors import ConfigurationMissing


@pytest.fixture
def store(tmp_path, monkeypatch) -> PropertyStore:
    monkeypatch.delenv("CLASSROOM_COURSE_ID", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return PropertyStore(tmp_path / "assistant" / "properties.json")


def test_empty_store_has_no_settings(store) -> None:
    """Test that a missing file yields empty settings."""
    settings = store.load()

    assert settings.course_id is None
    assert settings.gemini_api_key is None


def test_set_course_and_api_key_persist(store) -> None:
    """Test that both properties are written as flat string keys."""
    store.set_course(" 12345 ")
    store.set_api_key("AIza-secret")

    settings = PropertyStore(store.path).load()
    assert settings == Settings(course_id="12345", gemini_api_key="AIza-secret")
    with open(store.path, encoding="utf-8") as f:
        assert json.load(f) == {"course_id": "12345", "gemini_api_key": "AIza-secret"}


def test_empty_values_are_rejected(store) -> None:
    """Test that blank values are not stored."""
    with pytest.raises(ValueError):
        store.set_course("  ")
    with pytest.raises(ValueError):
        store.set_api_key("")

    assert not store.path.exists()


def test_environment_fills_missing_values(store, monkeypatch) -> None:
    """Test the environment fallback and that the file takes precedence."""
    monkeypatch.setenv("CLASSROOM_COURSE_ID", "env-course")
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    store.set_course("file-course")

    settings = store.load()

    assert settings.course_id == "file-course"
    assert settings.gemini_api_key == "env-key"


def test_unreadable_file_is_ignored(store) -> None:
    """Test that a corrupt property file does not break loading."""
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")

    assert store.load() == Settings()


def test_require_helpers() -> None:
    """Test that required settings raise ConfigurationMissing when absent."""
    settings = Settings(course_id="c-1", gemini_api_key="key")
    assert settings.require_course_id() == "c-1"
    assert settings.require_api_key() == "key"

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings().require_course_id()
    assert exc_info.value.setting == "course_id"

    with pytest.raises(ConfigurationMissing) as exc_info:
        Settings(gemini_api_key="").require_api_key()
    assert exc_info.value.setting == "gemini_api_key"
