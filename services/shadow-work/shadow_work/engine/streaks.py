from datetime import date, timedelta
from typing import List, Optional

from ..schemas.program import ExerciseCompletion, Program
from ..utils.clock import now_utc, utc_day
from ..utils.numbers import round_half_up


def all_completions(program: Program) -> List[ExerciseCompletion]:
    return [completion for week in program.progress for completion in week.completed_exercises]


def _active_days(program: Program) -> List[date]:
    return sorted({utc_day(completion.completed_at) for completion in all_completions(program)}, reverse=True)


def compute_streak(program: Program, today: Optional[date] = None) -> int:
    """Count consecutive calendar days with at least one completion, ending today.

    Days are UTC calendar days. Completions dated after ``today`` are ignored,
    and a day without activity today means the streak is 0.
    """
    today = today or now_utc().date()
    streak = 0
    expected = today
    for day in _active_days(program):
        if day > today:
            continue
        if day != expected:
            break
        streak += 1
        expected = day - timedelta(days=1)
    return streak


def longest_streak(program: Program) -> int:
    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in reversed(_active_days(program)):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


def practice_minutes(program: Program) -> int:
    return sum(completion.duration for completion in all_completions(program))


def practice_hours(program: Program) -> float:
    return round_half_up(practice_minutes(program) / 60, 1)
