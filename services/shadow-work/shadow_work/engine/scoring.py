from datetime import date
from typing import Optional

from ..schemas.profile import Profile
from ..schemas.program import TOTAL_WEEKS, Program
from ..utils.numbers import round_half_up
from .progress import is_week_complete
from .streaks import compute_streak, practice_hours

# Seven exercises a week across the whole program.
NOMINAL_EXERCISE_VOLUME = 56
WEEKS_WEIGHT = 40
EXERCISES_WEIGHT = 40
CONSISTENCY_WEIGHT = 20


def _ratio(value: float, denominator: float) -> float:
    return min(max(value, 0) / denominator, 1.0)


def integration_level(completed_weeks: int, total_exercises_completed: int, streak_days: int) -> int:
    score = (
        WEEKS_WEIGHT * _ratio(completed_weeks, TOTAL_WEEKS)
        + EXERCISES_WEIGHT * _ratio(total_exercises_completed, NOMINAL_EXERCISE_VOLUME)
        + CONSISTENCY_WEIGHT * _ratio(streak_days, NOMINAL_EXERCISE_VOLUME)
    )
    return int(round_half_up(score))


def completed_weeks(program: Program) -> int:
    return sum(1 for week in program.progress if is_week_complete(week))


def sync_profile(profile: Profile, program: Program, today: Optional[date] = None) -> Profile:
    """Recompute every profile field that is derived from the program."""
    weeks_done = completed_weeks(program)
    streak = compute_streak(program, today)
    return profile.model_copy(
        update={
            "integration_level": integration_level(weeks_done, program.total_exercises_completed, streak),
            "completed_weeks": weeks_done,
            "total_practice_hours": practice_hours(program),
            "current_week": program.current_week,
        }
    )
