"""Shared fixtures for the shadow work test suite."""

import pathlib
import sys
from datetime import datetime, timedelta, timezone

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shadow_work.engine.catalogue import default_catalogue  # noqa: E402
from shadow_work.engine.profile import start_profile  # noqa: E402
from shadow_work.engine.progress import (  # noqa: E402
    MIN_COMPLETIONS_TO_ADVANCE,
    advance_week,
    record_completion,
    record_weekly_reflection,
    start_program,
)


# ── Time ────────────────────────────────────────────────────────────────

@pytest.fixture
def frozen_now():
    """Noon UTC on a fixed Sunday, used as "now" for every transition."""
    return datetime(2026, 2, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Catalogue ───────────────────────────────────────────────────────────

@pytest.fixture
def catalogue():
    return default_catalogue()


# ── Program factories ───────────────────────────────────────────────────

@pytest.fixture
def make_program(frozen_now):
    """Factory for a freshly started program; defaults to an INTJ (shadow: Se)."""

    def _factory(personality_type="INTJ", user_id="user-1"):
        return start_program(user_id, personality_type, now=frozen_now - timedelta(days=30))

    return _factory


@pytest.fixture
def make_profile(frozen_now):
    def _factory(personality_type="INTJ", user_id="user-1"):
        return start_profile(user_id, personality_type, now=frozen_now - timedelta(days=30))

    return _factory


@pytest.fixture
def complete_exercises(frozen_now):
    """Record ``count`` completions in the frontier week, cycling through its exercises."""

    def _complete(program, count, now=None, duration=15):
        exercises = program.bound_week(program.current_week).daily_exercises
        for index in range(count):
            exercise = exercises[index % len(exercises)]
            program = record_completion(program, exercise.id, duration, now=now or frozen_now)
        return program

    return _complete


@pytest.fixture
def finish_week(complete_exercises, frozen_now):
    """Meet the advance gate for the frontier week and move to the next one."""

    def _finish(program, now=None):
        week = program.current_week
        program = complete_exercises(program, MIN_COMPLETIONS_TO_ADVANCE, now=now)
        program = record_weekly_reflection(program, week, {f"w{week}-q1": "Noticed it more often."}, now=now or frozen_now)
        return advance_week(program)

    return _finish
