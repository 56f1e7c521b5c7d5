"""User settings for the Classroom assistant.

Only two string properties are persisted: the active course id and the Gemini
API key. They live in a flat JSON property file; environment variables fill in
values the file does not hold.
"""
from __future__ import annotations

import json
import logging
import os
import typing as t
from pathlib import Path

from pydantic import BaseModel

from orchestrator.errors import ConfigurationMissing

logger = logging.getLogger(__name__)

COURSE_ID_KEY = "course_id"
API_KEY_KEY = "gemini_api_key"

# Directory holding the property file - configurable via environment variable
ASSISTANT_HOME = os.getenv(
    "CLASSROOM_ASSISTANT_HOME",
    str(Path.home() / ".classroom_assistant"),
)
PROPERTIES_FILE = "properties.json"

ENV_FALLBACKS = {
    COURSE_ID_KEY: "CLASSROOM_COURSE_ID",
    API_KEY_KEY: "GEMINI_API_KEY",
}


class Settings(BaseModel):
    """Settings threaded into every command entry point."""
    course_id: t.Optional[str] = None
    gemini_api_key: t.Optional[str] = None

    def require_course_id(self) -> str:
        if not self.course_id:
            raise ConfigurationMissing(
                COURSE_ID_KEY,
                "Set the active course first (classroom-assistant set-course COURSE_ID).",
            )
        return self.course_id

    def require_api_key(self) -> str:
        if not self.gemini_api_key:
            raise ConfigurationMissing(
                API_KEY_KEY,
                "Set the Gemini API key first (classroom-assistant set-api-key KEY).",
            )
        return self.gemini_api_key


class PropertyStore:
    """Flat string key-value store backed by a JSON file."""

    def __init__(self, path: t.Optional[Path] = None) -> None:
        self.path = Path(path) if path else Path(ASSISTANT_HOME) / PROPERTIES_FILE

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable property file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring property file %s: expected a JSON object", self.path)
            return {}
        return {k: str(v) for k, v in data.items() if v is not None}

    def _write_property(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info("Updated property '%s' in %s", key, self.path)

    def get_property(self, key: str) -> t.Optional[str]:
        value = self._read().get(key)
        if value:
            return value
        env_name = ENV_FALLBACKS.get(key)
        return os.getenv(env_name) if env_name else None

    def load(self) -> Settings:
        """Read the current settings."""
        return Settings(
            course_id=self.get_property(COURSE_ID_KEY),
            gemini_api_key=self.get_property(API_KEY_KEY),
        )

    def set_course(self, course_id: str) -> Settings:
        course_id = course_id.strip()
        if not course_id:
            raise ValueError("Course id must not be empty")
        self._write_property(COURSE_ID_KEY, course_id)
        return self.load()

    def set_api_key(self, api_key: str) -> Settings:
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        self._write_property(API_KEY_KEY, api_key)
        return self.load()
