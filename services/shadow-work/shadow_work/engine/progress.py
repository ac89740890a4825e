"""Progress state machine for the 8-week program.

Every transition takes a Program and returns a new one; the input is never
modified, so a failed transition leaves the caller's state untouched.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..schemas.dashboard import AdvanceCheck, InsightsSummary
from ..schemas.program import (
    ExerciseCompletion,
    FeltDifficulty,
    Program,
    WeeklyReflection,
    WeekProgress,
    WeekStatus,
)
from ..utils.clock import now_utc, utc_day
from ..utils.numbers import round_half_up
from .catalogue import Catalogue, bind_program, next_week
from .errors import AtFinalWeek, InsufficientCompletions, NotStarted, ReflectionRequired, ShadowWorkError
from .functions import normalize_type, resolve_inferior
from .streaks import compute_streak

logger = logging.getLogger(__name__)

# Candidate for a per-program setting; kept fixed until that is decided.
MIN_COMPLETIONS_TO_ADVANCE = 5
RECENT_INSIGHTS_LIMIT = 5


def start_program(
    user_id: str,
    personality_type: str,
    catalogue: Optional[Catalogue] = None,
    now: Optional[datetime] = None,
) -> Program:
    code = normalize_type(personality_type)
    return Program(
        user_id=user_id,
        personality_type=code,
        inferior_function=resolve_inferior(code),
        start_date=now or now_utc(),
        current_week=1,
        weeks=bind_program(code, catalogue),
    )


def is_week_complete(week: WeekProgress) -> bool:
    return len(week.completed_exercises) >= MIN_COMPLETIONS_TO_ADVANCE and week.weekly_reflection is not None


def is_week_unlocked(program: Program, week_number: int) -> bool:
    """Weeks up to and including the frontier are open; later ones wait for the gate."""
    return 1 <= week_number <= program.current_week


def week_status(program: Program, week_number: int) -> WeekStatus:
    if not is_week_unlocked(program, week_number):
        return "locked"
    if week_number == program.current_week:
        return "current"
    week = program.week_progress(week_number)
    if week is None:
        return "locked"
    if week.completed_date is not None:
        return "completed"
    return "in-progress"


def _replace_week(program: Program, updated: WeekProgress) -> List[WeekProgress]:
    return [updated if entry.week_number == updated.week_number else entry for entry in program.progress]


def record_completion(
    program: Program,
    exercise_id: str,
    duration: int,
    *,
    notes: Optional[str] = None,
    insights: Optional[Iterable[str]] = None,
    difficulty: Optional[FeltDifficulty] = None,
    will_repeat: Optional[bool] = None,
    now: Optional[datetime] = None,
) -> Program:
    now = now or now_utc()
    insight_list = [item for item in (insights or []) if item]
    completion = ExerciseCompletion(
        exercise_id=exercise_id,
        completed_at=now,
        duration=duration,
        notes=notes,
        insights=insight_list or None,
        difficulty=difficulty,
        will_repeat=will_repeat,
    )

    week_number = program.current_week
    existing = program.week_progress(week_number)
    if existing is None:
        week = WeekProgress(week_number=week_number, start_date=now, completed_exercises=[completion])
        progress = [*program.progress, week]
    else:
        week = existing.model_copy(update={"completed_exercises": [*existing.completed_exercises, completion]})
        progress = _replace_week(program, week)

    updated = program.model_copy(
        update={
            "progress": progress,
            "total_exercises_completed": program.total_exercises_completed + 1,
            "last_activity_date": now,
            "overall_insights": [*program.overall_insights, *insight_list],
        }
    )
    updated = updated.model_copy(update={"streak_days": compute_streak(updated, utc_day(now))})
    logger.debug(
        "Recorded %s for %s in week %d (%d this week)",
        exercise_id,
        program.user_id,
        week_number,
        len(week.completed_exercises),
    )
    return updated


def record_weekly_reflection(
    program: Program,
    week_number: int,
    answers: Dict[str, str],
    *,
    insights: Optional[Iterable[str]] = None,
    challenges: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
) -> Program:
    existing = program.week_progress(week_number)
    if existing is None:
        raise NotStarted(week_number)
    now = now or now_utc()
    week = existing.model_copy(
        update={
            "weekly_reflection": WeeklyReflection(answers=dict(answers), completed_at=now),
            "completed_date": now,
            "insights": [*existing.insights, *(item for item in (insights or []) if item)],
            "challenges": [*existing.challenges, *(item for item in (challenges or []) if item)],
        }
    )
    logger.debug("Recorded week %d reflection for %s", week_number, program.user_id)
    return program.model_copy(update={"progress": _replace_week(program, week)})


def _advance_blocker(program: Program) -> Optional[ShadowWorkError]:
    if next_week(program.current_week) is None:
        return AtFinalWeek()
    current = program.week_progress(program.current_week)
    if current is None:
        return NotStarted(program.current_week)
    completed = len(current.completed_exercises)
    if completed < MIN_COMPLETIONS_TO_ADVANCE:
        return InsufficientCompletions(completed, MIN_COMPLETIONS_TO_ADVANCE)
    if current.weekly_reflection is None:
        return ReflectionRequired(program.current_week)
    return None


def can_advance(program: Program) -> AdvanceCheck:
    blocker = _advance_blocker(program)
    if blocker is None:
        return AdvanceCheck(allowed=True)
    return AdvanceCheck(
        allowed=False,
        reason=blocker.message,
        code=blocker.code,
        remaining=getattr(blocker, "remaining", 0),
    )


def advance_week(program: Program) -> Program:
    blocker = _advance_blocker(program)
    if blocker is not None:
        raise blocker
    logger.debug("Advancing %s from week %d", program.user_id, program.current_week)
    return program.model_copy(update={"current_week": next_week(program.current_week)})


def week_completion_percentage(program: Program, week_number: int) -> int:
    progress = program.week_progress(week_number)
    week = program.bound_week(week_number)
    if progress is None or week is None or not week.daily_exercises:
        return 0
    ratio = len(progress.completed_exercises) / len(week.daily_exercises)
    return int(min(100, round_half_up(ratio * 100)))


def overall_completion_percentage(program: Program) -> int:
    total_slots = sum(len(week.daily_exercises) for week in program.weeks)
    if not total_slots:
        return 0
    return int(min(100, round_half_up(program.total_exercises_completed / total_slots * 100)))


def insights_summary(program: Program) -> InsightsSummary:
    by_week: Dict[int, List[str]] = {}
    for week in sorted(program.progress, key=lambda entry: entry.week_number):
        completion_insights = [item for completion in week.completed_exercises for item in (completion.insights or [])]
        by_week[week.week_number] = [*completion_insights, *week.insights]
    flattened = [item for items in by_week.values() for item in items]
    return InsightsSummary(total=len(flattened), by_week=by_week, recent=flattened[-RECENT_INSIGHTS_LIMIT:])
