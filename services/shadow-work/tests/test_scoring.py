import itertools

import pytest

from shadow_work.engine.scoring import NOMINAL_EXERCISE_VOLUME, completed_weeks, integration_level, sync_profile
from shadow_work.schemas.program import TOTAL_WEEKS


def test_integration_bounds():
    assert integration_level(0, 0, 0) == 0
    assert integration_level(TOTAL_WEEKS, NOMINAL_EXERCISE_VOLUME, NOMINAL_EXERCISE_VOLUME) == 100


def test_integration_saturates():
    assert integration_level(20, 500, 500) == 100


def test_negative_inputs_count_as_zero():
    assert integration_level(-3, -1, -10) == 0


@pytest.mark.parametrize("weeks,exercises,streak,expected", [
    (1, 0, 0, 5),
    (4, 28, 28, 50),
    (0, 14, 0, 10),
    # 2.5 rounds up.
    (0, 0, 7, 3),
])
def test_integration_weights(weeks, exercises, streak, expected):
    assert integration_level(weeks, exercises, streak) == expected


def test_integration_is_monotonic():
    grid = list(itertools.product(range(0, 9, 2), range(0, 60, 7), range(0, 60, 7)))
    for weeks, exercises, streak in grid:
        base = integration_level(weeks, exercises, streak)
        assert integration_level(weeks + 1, exercises, streak) >= base
        assert integration_level(weeks, exercises + 1, streak) >= base
        assert integration_level(weeks, exercises, streak + 1) >= base
        assert 0 <= base <= 100


def test_sync_profile_recomputes_derived_fields(make_program, make_profile, finish_week, complete_exercises, frozen_now):
    program = finish_week(make_program())
    program = complete_exercises(program, 2, duration=30)
    profile = make_profile().model_copy(update={"common_triggers": ["stress"]})

    synced = sync_profile(profile, program, frozen_now.date())

    assert completed_weeks(program) == 1
    assert synced.completed_weeks == 1
    assert synced.current_week == 2
    # Five 15-minute and two 30-minute sessions.
    assert synced.total_practice_hours == 2.3
    assert synced.integration_level == integration_level(1, 7, 1)
    assert synced.common_triggers == ["stress"]
    assert profile.integration_level == 0


def test_incomplete_week_is_not_counted(make_program, complete_exercises):
    program = complete_exercises(make_program(), 9)
    assert completed_weeks(program) == 0
