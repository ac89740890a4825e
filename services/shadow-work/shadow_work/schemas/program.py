from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..engine.functions import CognitiveFunction, PersonalityType

TOTAL_WEEKS = 8

WeekNumber = Annotated[int, Field(ge=1, le=TOTAL_WEEKS)]
ExerciseType = Literal["awareness", "reflection", "practice", "integration", "journaling", "meditation", "behavioral"]
ExerciseDifficulty = Literal["beginner", "intermediate", "advanced"]
FeltDifficulty = Literal["easy", "medium", "hard"]
WeekStatus = Literal["locked", "current", "in-progress", "completed"]


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: ExerciseType
    title: str
    description: str
    duration: int = Field(gt=0)
    difficulty: ExerciseDifficulty
    instructions: Tuple[str, ...]
    target_function: CognitiveFunction
    compatible_types: Tuple[PersonalityType, ...]
    weeks: Tuple[WeekNumber, ...]
    reflection_prompts: Tuple[str, ...] = ()
    benefits: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()


class ReflectionQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str


class WeekTheme(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: WeekNumber
    title: str
    subtitle: str
    focus: str
    goal: str
    description: str
    key_points: Tuple[str, ...]
    reflection_prompt: str
    reflection_questions: Tuple[ReflectionQuestion, ...]
    milestones: Tuple[str, ...]


class WeeklyReflectionPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    questions: Tuple[ReflectionQuestion, ...]


class Week(BaseModel):
    model_config = ConfigDict(frozen=True)

    theme: WeekTheme
    daily_exercises: Tuple[Exercise, ...]
    weekly_reflection: WeeklyReflectionPrompt
    reading_material: Optional[str] = None
    milestones: Tuple[str, ...]


class ExerciseCompletion(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: str
    completed_at: datetime
    duration: int = Field(ge=0)
    notes: Optional[str] = None
    insights: Optional[List[str]] = None
    difficulty: Optional[FeltDifficulty] = None
    will_repeat: Optional[bool] = None


class WeeklyReflection(BaseModel):
    answers: Dict[str, str]
    completed_at: datetime


class WeekProgress(BaseModel):
    week_number: WeekNumber
    start_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    completed_exercises: List[ExerciseCompletion] = Field(default_factory=list)
    weekly_reflection: Optional[WeeklyReflection] = None
    insights: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)


class Program(BaseModel):
    user_id: str
    personality_type: PersonalityType
    inferior_function: CognitiveFunction
    start_date: datetime
    current_week: WeekNumber = 1
    weeks: Tuple[Week, ...]
    progress: List[WeekProgress] = Field(default_factory=list)
    overall_insights: List[str] = Field(default_factory=list)
    streak_days: int = Field(default=0, ge=0)
    total_exercises_completed: int = Field(default=0, ge=0)
    last_activity_date: Optional[datetime] = None

    def week_progress(self, week_number: int) -> Optional[WeekProgress]:
        return next((entry for entry in self.progress if entry.week_number == week_number), None)

    def bound_week(self, week_number: int) -> Optional[Week]:
        return next((week for week in self.weeks if week.theme.number == week_number), None)
