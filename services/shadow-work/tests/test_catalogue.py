import pytest
import yaml
from pydantic import ValidationError

from shadow_work.config import DATA_DIR
from shadow_work.engine.catalogue import (
    Catalogue,
    bind_program,
    load_catalogue,
    next_week,
    validate_document,
)
from shadow_work.engine.errors import CatalogueError, InvalidType
from shadow_work.engine.functions import ALL_TYPES, resolve_inferior
from shadow_work.engine.progress import MIN_COMPLETIONS_TO_ADVANCE
from shadow_work.schemas.program import TOTAL_WEEKS


def test_default_catalogue_has_eight_themes(catalogue):
    assert list(catalogue.themes) == list(range(1, TOTAL_WEEKS + 1))
    for number, theme in catalogue.themes.items():
        assert theme.number == number
        assert theme.milestones
        assert theme.reflection_questions


@pytest.mark.parametrize("code", ALL_TYPES)
def test_every_week_binds_enough_exercises_to_advance(catalogue, code):
    for week in range(1, TOTAL_WEEKS + 1):
        assert len(catalogue.exercises_for(code, week)) >= MIN_COMPLETIONS_TO_ADVANCE, (code, week)


def test_first_weeks_hold_no_advanced_exercises(catalogue):
    for code in ALL_TYPES:
        for week in (1, 2):
            assert all(exercise.difficulty != "advanced" for exercise in catalogue.exercises_for(code, week))


def test_compatible_types_default_to_types_sharing_the_inferior(catalogue):
    exercise = catalogue.get_exercise("se-sensory-inventory")
    assert exercise.compatible_types == ("INTJ", "INFJ")
    assert catalogue.get_exercise("missing") is None


def test_exercises_for_filters_by_week_and_type(catalogue):
    week_one = catalogue.exercises_for("INTJ", 1)
    assert [exercise.id for exercise in week_one] == [
        "se-sensory-inventory",
        "se-body-journal",
        "se-mindful-walk",
        "se-aesthetic-day",
        "se-texture-pause",
    ]
    assert all(exercise.target_function == "Se" for exercise in catalogue.all_exercises("infj"))


@pytest.mark.parametrize("code", ALL_TYPES)
def test_bound_program_targets_the_inferior(code):
    weeks = bind_program(code)
    inferior = resolve_inferior(code)
    assert [week.theme.number for week in weeks] == list(range(1, TOTAL_WEEKS + 1))
    for week in weeks:
        assert week.daily_exercises
        for exercise in week.daily_exercises:
            assert exercise.target_function == inferior
            assert code in exercise.compatible_types
            assert week.theme.number in exercise.weeks


def test_binding_is_idempotent():
    assert bind_program("ENFP") == bind_program("ENFP")


def test_binding_fills_in_function_name():
    weeks = bind_program("INTJ")
    assert "Extraverted Sensing" in weeks[0].weekly_reflection.prompt
    assert "{function_name}" not in weeks[0].weekly_reflection.prompt
    assert weeks[0].reading_material == "/programs/shadow-work/week-1"
    assert weeks[0].milestones == weeks[0].theme.milestones


def test_binding_unknown_type_raises():
    with pytest.raises(InvalidType):
        bind_program("ABCD")


def test_reference_data_is_frozen(catalogue):
    exercise = catalogue.get_exercise("se-body-journal")
    with pytest.raises(ValidationError):
        exercise.duration = 1
    with pytest.raises(TypeError):
        catalogue.exercises["new"] = exercise


def test_shipped_documents_validate():
    for name in ("themes", "exercises"):
        data = yaml.safe_load((DATA_DIR / f"{name}.yaml").read_text(encoding="utf-8"))
        assert validate_document(name, data) == []


def test_validate_document_reports_errors():
    assert validate_document("exercises", {"exercises": []})
    errors = validate_document("exercises", {"exercises": [{"id": "x", "duration": 7}]})
    assert errors
    assert any(error.startswith("exercises/0") for error in errors)
    assert validate_document("themes", {"themes": []})


def test_load_catalogue_rejects_bad_yaml(tmp_path):
    broken = tmp_path / "exercises.yaml"
    broken.write_text("exercises: [unclosed", encoding="utf-8")
    with pytest.raises(CatalogueError) as excinfo:
        load_catalogue(exercises_path=broken)
    assert excinfo.value.code == "catalogue_error"


def test_load_catalogue_rejects_schema_violations(tmp_path):
    invalid = tmp_path / "exercises.yaml"
    invalid.write_text("exercises:\n  - id: only-an-id\n", encoding="utf-8")
    with pytest.raises(CatalogueError) as excinfo:
        load_catalogue(exercises_path=invalid)
    assert excinfo.value.errors


def test_load_catalogue_reports_missing_file(tmp_path):
    with pytest.raises(CatalogueError):
        load_catalogue(themes_path=tmp_path / "nope.yaml")


def test_catalogue_rejects_duplicate_ids(catalogue):
    exercise = catalogue.get_exercise("fi-emotion-naming")
    with pytest.raises(CatalogueError):
        Catalogue(catalogue.themes.values(), [exercise, exercise])


def test_catalogue_rejects_missing_weeks(catalogue):
    themes = [theme for number, theme in catalogue.themes.items() if number != 4]
    with pytest.raises(CatalogueError) as excinfo:
        Catalogue(themes, [])
    assert "missing week 4" in excinfo.value.errors


def test_next_week():
    assert next_week(1) == 2
    assert next_week(7) == 8
    assert next_week(8) is None
