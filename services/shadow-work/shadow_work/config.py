import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"

_ENV_KEYS = {
    "themes_path": "SHADOW_WORK_THEMES_PATH",
    "exercises_path": "SHADOW_WORK_EXERCISES_PATH",
    "today_exercise_limit": "SHADOW_WORK_TODAY_LIMIT",
    "recommendation_limit": "SHADOW_WORK_RECOMMENDATION_LIMIT",
}


class EngineSettings(BaseModel):
    themes_path: Path = DATA_DIR / "themes.yaml"
    exercises_path: Path = DATA_DIR / "exercises.yaml"
    today_exercise_limit: int = Field(default=3, ge=0)
    recommendation_limit: int = Field(default=5, ge=0)
    recent_completion_limit: int = Field(default=5, ge=0)
    milestone_limit: int = Field(default=3, ge=0)


_cached_settings: Optional[EngineSettings] = None


def _read_environment() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        value = os.getenv(env_key)
        if value:
            overrides[field_name] = value
    return overrides


def _normalize_settings(candidate: Optional[Dict[str, Any]]) -> EngineSettings:
    if not candidate:
        return EngineSettings()
    try:
        return EngineSettings(**candidate)
    except ValidationError as error:
        logger.warning("Ignoring invalid shadow work settings overrides: %s", error)
        return EngineSettings()


def get_settings() -> EngineSettings:
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = _normalize_settings(_read_environment())
    return _cached_settings


def reset_settings() -> None:
    global _cached_settings
    _cached_settings = None
