import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..engine import profile as profile_ops
from ..engine import progress
from ..engine.errors import ShadowWorkError
from ..engine.functions import normalize_type
from ..engine.recommendations import dashboard, recommend
from ..engine.scoring import sync_profile
from ..engine.transfer import export_progress, import_progress
from ..schemas.dashboard import AdvanceCheck, DashboardData, ExerciseRecommendation
from ..schemas.profile import Profile
from ..schemas.program import Program

logger = logging.getLogger(__name__)

State = Tuple[Program, Profile]

_states: Dict[str, State] = {}
_lock = asyncio.Lock()


class ProgramNotFound(LookupError):
    def __init__(self, uid: str) -> None:
        super().__init__(f"No shadow work program for user {uid}")
        self.uid = uid


def _require(uid: str) -> State:
    state = _states.get(uid)
    if not state:
        raise ProgramNotFound(uid)
    return state


def _commit(uid: str, program: Program, profile: Profile) -> State:
    state = (program, sync_profile(profile, program))
    _states[uid] = state
    return state


def _apply(uid: str, action: str, transition: Callable[[Program], Program]) -> State:
    program, profile = _require(uid)
    try:
        updated = transition(program)
    except ShadowWorkError as error:
        logger.warning("Rejected %s for %s: %s", action, uid, error.code)
        raise
    return _commit(uid, updated, profile)


async def enroll(uid: str, personality_type: str) -> State:
    async with _lock:
        code = normalize_type(personality_type)
        existing = _states.get(uid)
        if existing and existing[0].personality_type == code:
            return existing
        program = progress.start_program(uid, code)
        profile = profile_ops.start_profile(uid, code, now=program.start_date)
        logger.info("Enrolled %s as %s targeting %s", uid, program.personality_type, program.inferior_function)
        return _commit(uid, program, profile)


async def get_state(uid: str) -> Optional[State]:
    async with _lock:
        return _states.get(uid)


async def complete_exercise(uid: str, params: Dict[str, Any]) -> State:
    async with _lock:
        return _apply(
            uid,
            "completion",
            lambda program: progress.record_completion(
                program,
                params["exercise_id"],
                int(params.get("duration") or 0),
                notes=params.get("notes"),
                insights=params.get("insights"),
                difficulty=params.get("difficulty"),
                will_repeat=params.get("will_repeat"),
            ),
        )


async def submit_reflection(uid: str, week_number: int, answers: Dict[str, str], params: Optional[Dict[str, Any]] = None) -> State:
    params = params or {}
    async with _lock:
        return _apply(
            uid,
            "reflection",
            lambda program: progress.record_weekly_reflection(
                program,
                week_number,
                answers,
                insights=params.get("insights"),
                challenges=params.get("challenges"),
            ),
        )


async def advance(uid: str) -> State:
    async with _lock:
        program, profile = _apply(uid, "advance", progress.advance_week)
        logger.info("Advanced %s to week %d", uid, program.current_week)
        return program, profile


async def check_advance(uid: str) -> AdvanceCheck:
    async with _lock:
        program, _ = _require(uid)
        return progress.can_advance(program)


async def update_profile(uid: str, change: Callable[[Profile], Profile]) -> Profile:
    async with _lock:
        program, profile = _require(uid)
        _, updated = _commit(uid, program, change(profile))
        return updated


async def get_dashboard(uid: str) -> DashboardData:
    async with _lock:
        program, profile = _require(uid)
        return dashboard(program, profile)


async def get_recommendations(uid: str) -> List[ExerciseRecommendation]:
    async with _lock:
        program, profile = _require(uid)
        return recommend(program, profile)


async def export_state(uid: str) -> str:
    async with _lock:
        program, profile = _require(uid)
        return export_progress(program, profile)


async def import_state(text: str) -> State:
    program, profile = import_progress(text)
    async with _lock:
        logger.info("Imported program for %s at week %d", program.user_id, program.current_week)
        return _commit(program.user_id, program, profile)


async def reset() -> None:
    async with _lock:
        _states.clear()
