from datetime import date, datetime
from typing import Iterable, List, Optional

from ..config import EngineSettings, get_settings
from ..schemas.dashboard import DashboardData, ExerciseRecommendation, Impact, StreakInfo, UpcomingMilestone
from ..schemas.profile import Profile
from ..schemas.program import Exercise, Program
from ..utils.clock import as_utc, now_utc
from ..utils.numbers import clamp
from .functions import function_name
from .progress import can_advance, insights_summary, overall_completion_percentage, week_completion_percentage
from .scoring import sync_profile
from .streaks import all_completions, compute_streak, longest_streak, practice_hours

BASE_RELEVANCE = 50
TRIGGER_BOOST = 20
GROWTH_AREA_BOOST = 15
DIFFICULTY_BOOST = 10
LOW_INTEGRATION_LEVEL = 30
HIGH_INTEGRATION_LEVEL = 60
HIGH_IMPACT_SCORE = 70
MEDIUM_IMPACT_SCORE = 50
DAYS_PER_WEEK = 7


def candidate_exercises(program: Program) -> List[Exercise]:
    week = program.bound_week(program.current_week)
    if week is None:
        return []
    progress = program.week_progress(program.current_week)
    done = {completion.exercise_id for completion in progress.completed_exercises} if progress else set()
    return [
        exercise
        for exercise in week.daily_exercises
        if exercise.id not in done and program.personality_type in exercise.compatible_types
    ]


def _contains_any(haystacks: Iterable[str], needles: Iterable[str]) -> bool:
    lowered = [needle.strip().lower() for needle in needles if needle and needle.strip()]
    return any(needle in haystack.lower() for haystack in haystacks for needle in lowered)


def relevance_score(exercise: Exercise, profile: Profile) -> int:
    score = BASE_RELEVANCE
    if _contains_any(exercise.tags, profile.common_triggers):
        score += TRIGGER_BOOST
    if _contains_any(exercise.benefits, (area.area for area in profile.growth_areas)):
        score += GROWTH_AREA_BOOST
    if profile.integration_level < LOW_INTEGRATION_LEVEL and exercise.difficulty == "beginner":
        score += DIFFICULTY_BOOST
    elif profile.integration_level >= HIGH_INTEGRATION_LEVEL and exercise.difficulty == "advanced":
        score += DIFFICULTY_BOOST
    return int(clamp(score, 0, 100))


def impact_for(score: int) -> Impact:
    if score >= HIGH_IMPACT_SCORE:
        return "high"
    if score >= MEDIUM_IMPACT_SCORE:
        return "medium"
    return "low"


def _reason(profile: Profile, score: int) -> str:
    if score >= HIGH_IMPACT_SCORE:
        return (
            f"A strong fit for your integration level ({profile.integration_level}%) "
            "and the triggers you are working with"
        )
    if score >= MEDIUM_IMPACT_SCORE:
        return f"Recommended for developing {function_name(profile.inferior_function)}"
    return "A foundational exercise for starting work with your shadow function"


def recommend(program: Program, profile: Profile, today: Optional[date] = None) -> List[ExerciseRecommendation]:
    # Derived fields drive the difficulty boost, so rank against a synced copy.
    synced = sync_profile(profile, program, today)
    recommendations = []
    for exercise in candidate_exercises(program):
        score = relevance_score(exercise, synced)
        recommendations.append(
            ExerciseRecommendation(
                exercise=exercise,
                reason=_reason(synced, score),
                relevance_score=score,
                estimated_impact=impact_for(score),
            )
        )
    # sorted() is stable, so ties keep catalogue order.
    return sorted(recommendations, key=lambda item: item.relevance_score, reverse=True)


def next_exercise(program: Program, profile: Profile, today: Optional[date] = None) -> Optional[Exercise]:
    """Best-ranked exercise still open in the frontier week, or None once all of them are done."""
    ranked = recommend(program, profile, today)
    return ranked[0].exercise if ranked else None


def upcoming_milestones(program: Program, limit: int) -> List[UpcomingMilestone]:
    milestones = [
        UpcomingMilestone(
            week=week.theme.number,
            milestone=milestone,
            days_until=(week.theme.number - program.current_week) * DAYS_PER_WEEK,
        )
        for week in program.weeks
        if week.theme.number >= program.current_week
        for milestone in week.milestones
    ]
    return milestones[:limit]


def dashboard(
    program: Program,
    profile: Profile,
    settings: Optional[EngineSettings] = None,
    now: Optional[datetime] = None,
) -> DashboardData:
    settings = settings or get_settings()
    today = as_utc(now or now_utc()).date()
    synced = sync_profile(profile, program, today)
    current_streak = compute_streak(program, today)
    recent = sorted(all_completions(program), key=lambda completion: as_utc(completion.completed_at), reverse=True)
    ranked = recommend(program, synced, today)
    return DashboardData(
        profile=synced,
        current_week=program.bound_week(program.current_week),
        today_exercises=candidate_exercises(program)[: settings.today_exercise_limit],
        recent_completions=recent[: settings.recent_completion_limit],
        upcoming_milestones=upcoming_milestones(program, settings.milestone_limit),
        recommendations=ranked[: settings.recommendation_limit],
        next_exercise=next_exercise(program, synced, today),
        streak_info=StreakInfo(
            current=current_streak,
            longest=max(longest_streak(program), current_streak),
            last_activity_date=program.last_activity_date,
        ),
        practice_hours=practice_hours(program),
        week_completion=week_completion_percentage(program, program.current_week),
        overall_completion=overall_completion_percentage(program),
        insights=insights_summary(program),
        can_advance=can_advance(program),
    )
