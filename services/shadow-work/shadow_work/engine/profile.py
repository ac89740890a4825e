from datetime import datetime
from typing import Optional

from ..schemas.profile import Breakthrough, GrowthArea, Profile
from ..utils.clock import now_utc
from .functions import normalize_type, resolve_stack


def start_profile(user_id: str, personality_type: str, now: Optional[datetime] = None) -> Profile:
    code = normalize_type(personality_type)
    stack = resolve_stack(code)
    return Profile(
        user_id=user_id,
        personality_type=code,
        dominant_function=stack.dominant,
        auxiliary_function=stack.auxiliary,
        tertiary_function=stack.tertiary,
        inferior_function=stack.inferior,
        program_start_date=now or now_utc(),
        current_week=1,
    )


def add_trigger(profile: Profile, trigger: str) -> Profile:
    if not trigger.strip() or trigger in profile.common_triggers:
        return profile
    return profile.model_copy(update={"common_triggers": [*profile.common_triggers, trigger]})


def add_behavior_pattern(profile: Profile, pattern: str) -> Profile:
    if not pattern.strip() or pattern in profile.behavior_patterns:
        return profile
    return profile.model_copy(update={"behavior_patterns": [*profile.behavior_patterns, pattern]})


def record_breakthrough(
    profile: Profile,
    description: str,
    week_number: int,
    now: Optional[datetime] = None,
) -> Profile:
    breakthrough = Breakthrough(date=now or now_utc(), description=description, week_number=week_number)
    return profile.model_copy(update={"breakthroughs": [*profile.breakthroughs, breakthrough]})


def update_growth_area(
    profile: Profile,
    area: str,
    progress: int,
    now: Optional[datetime] = None,
) -> Profile:
    """Upsert a growth area by exact name; an existing entry is overwritten in place."""
    entry = GrowthArea(area=area, progress=progress, last_updated=now or now_utc())
    if any(existing.area == area for existing in profile.growth_areas):
        areas = [entry if existing.area == area else existing for existing in profile.growth_areas]
    else:
        areas = [*profile.growth_areas, entry]
    return profile.model_copy(update={"growth_areas": areas})
