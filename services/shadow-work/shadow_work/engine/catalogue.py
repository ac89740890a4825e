"""Static week themes and exercise catalogue for the shadow work program.

The catalogue is reference data: it is read once from YAML, validated against
the JSON schemas shipped next to it, and then only looked up by id or by
(type, week). Programs receive bound copies of it through ``bind_program``.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple

import jsonschema
import yaml
from pydantic import ValidationError

from ..config import DATA_DIR, get_settings
from ..schemas.program import TOTAL_WEEKS, Exercise, Week, WeeklyReflectionPrompt, WeekTheme
from .errors import CatalogueError
from .functions import FUNCTION_STACKS, function_name, normalize_type, types_with_inferior

logger = logging.getLogger(__name__)

DocumentType = Literal["themes", "exercises"]

PROMPT_PLACEHOLDER = "{function_name}"


def _load_schema(name: str) -> Dict[str, Any]:
    schema_path = DATA_DIR / f"{name}.schema.json"
    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)["schema"]


_compiled_schemas = {
    "themes": jsonschema.Draft7Validator(_load_schema("themes")),
    "exercises": jsonschema.Draft7Validator(_load_schema("exercises")),
}


def validate_document(document_type: DocumentType, data: Any) -> List[str]:
    validator = _compiled_schemas[document_type]
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(part) for part in e.path])
    return [f"{'/'.join(map(str, err.path)) or '<root>'} {err.message}" for err in errors]


def _read_document(path: Path, document_type: DocumentType) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as error:
        raise CatalogueError(str(path), [str(error)]) from error
    errors = validate_document(document_type, data)
    if errors:
        raise CatalogueError(str(path), errors)
    return data


def _build_exercise(raw: Dict[str, Any]) -> Exercise:
    payload = dict(raw)
    if not payload.get("compatible_types"):
        payload["compatible_types"] = types_with_inferior(payload["target_function"])
    try:
        return Exercise(**payload)
    except ValidationError as error:
        raise CatalogueError(f"exercise {payload.get('id')}", [str(error)]) from error


def _build_theme(raw: Dict[str, Any]) -> WeekTheme:
    try:
        return WeekTheme(**raw)
    except ValidationError as error:
        raise CatalogueError(f"week {raw.get('number')}", [str(error)]) from error


class Catalogue:
    def __init__(self, themes: Iterable[WeekTheme], exercises: Iterable[Exercise]) -> None:
        theme_map: Dict[int, WeekTheme] = {}
        for theme in themes:
            if theme.number in theme_map:
                raise CatalogueError("themes", [f"duplicate week {theme.number}"])
            theme_map[theme.number] = theme
        missing = [number for number in range(1, TOTAL_WEEKS + 1) if number not in theme_map]
        if missing:
            raise CatalogueError("themes", [f"missing week {number}" for number in missing])

        exercise_map: Dict[str, Exercise] = {}
        for exercise in exercises:
            if exercise.id in exercise_map:
                raise CatalogueError("exercises", [f"duplicate exercise id {exercise.id}"])
            exercise_map[exercise.id] = exercise

        self._themes: Mapping[int, WeekTheme] = MappingProxyType(dict(sorted(theme_map.items())))
        self._exercises: Mapping[str, Exercise] = MappingProxyType(exercise_map)

    @property
    def themes(self) -> Mapping[int, WeekTheme]:
        return self._themes

    @property
    def exercises(self) -> Mapping[str, Exercise]:
        return self._exercises

    def theme(self, week_number: int) -> WeekTheme:
        return self._themes[week_number]

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return self._exercises.get(exercise_id)

    def all_exercises(self, personality_type: str) -> List[Exercise]:
        code = normalize_type(personality_type)
        inferior = FUNCTION_STACKS[code].inferior
        return [
            exercise
            for exercise in self._exercises.values()
            if exercise.target_function == inferior and code in exercise.compatible_types
        ]

    def exercises_for(self, personality_type: str, week_number: int) -> List[Exercise]:
        return [exercise for exercise in self.all_exercises(personality_type) if week_number in exercise.weeks]


def load_catalogue(themes_path: Optional[Path] = None, exercises_path: Optional[Path] = None) -> Catalogue:
    themes_path = Path(themes_path or DATA_DIR / "themes.yaml")
    exercises_path = Path(exercises_path or DATA_DIR / "exercises.yaml")
    themes_doc = _read_document(themes_path, "themes")
    exercises_doc = _read_document(exercises_path, "exercises")
    catalogue = Catalogue(
        themes=[_build_theme(raw) for raw in themes_doc["themes"]],
        exercises=[_build_exercise(raw) for raw in exercises_doc["exercises"]],
    )
    logger.debug("Loaded catalogue with %d themes and %d exercises", len(catalogue.themes), len(catalogue.exercises))
    return catalogue


@lru_cache(maxsize=None)
def _cached_catalogue(themes_path: str, exercises_path: str) -> Catalogue:
    return load_catalogue(Path(themes_path), Path(exercises_path))


def default_catalogue() -> Catalogue:
    settings = get_settings()
    return _cached_catalogue(str(settings.themes_path), str(settings.exercises_path))


def _reflection_prompt(theme: WeekTheme, display_name: str) -> str:
    return theme.reflection_prompt.replace(PROMPT_PLACEHOLDER, display_name)


def bind_program(personality_type: str, catalogue: Optional[Catalogue] = None) -> Tuple[Week, ...]:
    code = normalize_type(personality_type)
    catalogue = catalogue or default_catalogue()
    display_name = function_name(FUNCTION_STACKS[code].inferior)
    weeks = []
    for number in range(1, TOTAL_WEEKS + 1):
        theme = catalogue.theme(number)
        weeks.append(
            Week(
                theme=theme,
                daily_exercises=tuple(catalogue.exercises_for(code, number)),
                weekly_reflection=WeeklyReflectionPrompt(
                    prompt=_reflection_prompt(theme, display_name),
                    questions=theme.reflection_questions,
                ),
                reading_material=f"/programs/shadow-work/week-{number}",
                milestones=theme.milestones,
            )
        )
    return tuple(weeks)


def next_week(week_number: int) -> Optional[int]:
    if week_number >= TOTAL_WEEKS:
        return None
    return week_number + 1
