from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..engine.functions import CognitiveFunction, PersonalityType
from .program import WeekNumber


class Breakthrough(BaseModel):
    date: datetime
    description: str
    week_number: WeekNumber


class GrowthArea(BaseModel):
    area: str
    progress: int = Field(ge=0, le=100)
    last_updated: datetime


class Profile(BaseModel):
    user_id: str
    personality_type: PersonalityType
    dominant_function: CognitiveFunction
    auxiliary_function: CognitiveFunction
    tertiary_function: CognitiveFunction
    inferior_function: CognitiveFunction
    # Derived from the program by sync_profile; never set directly.
    integration_level: int = Field(default=0, ge=0, le=100)
    common_triggers: List[str] = Field(default_factory=list)
    behavior_patterns: List[str] = Field(default_factory=list)
    program_start_date: Optional[datetime] = None
    current_week: Optional[WeekNumber] = None
    completed_weeks: int = Field(default=0, ge=0)
    total_practice_hours: float = Field(default=0.0, ge=0)
    breakthroughs: List[Breakthrough] = Field(default_factory=list)
    growth_areas: List[GrowthArea] = Field(default_factory=list)
