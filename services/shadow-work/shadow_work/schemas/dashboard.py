from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from .profile import Profile
from .program import Exercise, ExerciseCompletion, Program, Week, WeekNumber

Impact = Literal["low", "medium", "high"]


class ExerciseRecommendation(BaseModel):
    exercise: Exercise
    reason: str
    relevance_score: int
    estimated_impact: Impact


class AdvanceCheck(BaseModel):
    allowed: bool
    reason: Optional[str] = None
    code: Optional[str] = None
    remaining: int = 0


class UpcomingMilestone(BaseModel):
    week: WeekNumber
    milestone: str
    days_until: int


class StreakInfo(BaseModel):
    current: int
    longest: int
    last_activity_date: Optional[datetime] = None


class InsightsSummary(BaseModel):
    total: int
    by_week: Dict[int, List[str]]
    recent: List[str]


class DashboardData(BaseModel):
    profile: Profile
    current_week: Week
    today_exercises: List[Exercise]
    recent_completions: List[ExerciseCompletion]
    upcoming_milestones: List[UpcomingMilestone]
    recommendations: List[ExerciseRecommendation]
    next_exercise: Optional[Exercise] = None
    streak_info: StreakInfo
    practice_hours: float
    week_completion: int
    overall_completion: int
    insights: InsightsSummary
    can_advance: AdvanceCheck


class ProgressExport(BaseModel):
    program: Program
    profile: Profile
    export_date: datetime
    version: str = "1.0"
