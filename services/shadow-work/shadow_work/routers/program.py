from typing import Any, Awaitable, Dict, TypeVar

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ..engine import profile as profile_ops
from ..engine.catalogue import default_catalogue
from ..engine.errors import ShadowWorkError
from ..engine.functions import ALL_TYPES, FUNCTION_DESCRIPTIONS, resolve_stack
from ..orchestrator import programs
from ..orchestrator.programs import ProgramNotFound

router = APIRouter(prefix="/shadow-work", tags=["shadow-work"])

T = TypeVar("T")

_STATUS_BY_CODE = {"invalid_type": 400, "import_failed": 400}


async def _guard(awaitable: Awaitable[T]) -> T:
    try:
        return await awaitable
    except ProgramNotFound as error:
        raise HTTPException(status_code=404, detail=str(error)) from error
    except ShadowWorkError as error:
        raise HTTPException(status_code=_STATUS_BY_CODE.get(error.code, 409), detail=error.to_detail()) from error
    except ValidationError as error:
        raise HTTPException(status_code=422, detail=str(error)) from error


def _require_uid(body: Dict[str, Any]) -> str:
    uid = body.get("uid")
    if not uid:
        raise HTTPException(status_code=400, detail="uid required")
    return str(uid)


def _int_field(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise HTTPException(status_code=400, detail=f"{name} must be an integer") from error


def _state_response(state) -> Dict[str, Any]:
    program, profile = state
    return {"program": program, "profile": profile}


@router.get("/types")
async def personality_types() -> Any:
    return [{"type": code, "shadow": resolve_stack(code).inferior} for code in ALL_TYPES]


@router.get("/stack/{personality_type}")
async def function_stack(personality_type: str) -> Any:
    try:
        stack = resolve_stack(personality_type)
    except ShadowWorkError as error:
        raise HTTPException(status_code=400, detail=error.to_detail()) from error
    return {
        "stack": stack._asdict(),
        "shadow": {"function": stack.inferior, **FUNCTION_DESCRIPTIONS[stack.inferior]},
    }


@router.get("/exercises/{exercise_id}")
async def exercise(exercise_id: str) -> Any:
    found = default_catalogue().get_exercise(exercise_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return found


@router.post("/enroll")
async def enroll(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    personality_type = body.get("type") or body.get("mbtiType") or body.get("personality_type")
    if not personality_type:
        raise HTTPException(status_code=400, detail="type required")
    return _state_response(await _guard(programs.enroll(uid, str(personality_type))))


@router.post("/complete")
async def complete(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    exercise_id = body.get("exerciseId") or body.get("exercise_id")
    if not exercise_id:
        raise HTTPException(status_code=400, detail="exerciseId required")
    params = {
        "exercise_id": exercise_id,
        "duration": _int_field(body.get("duration") or 0, "duration"),
        "notes": body.get("notes"),
        "insights": body.get("insights"),
        "difficulty": body.get("difficulty"),
        "will_repeat": body.get("willRepeat", body.get("will_repeat")),
    }
    return _state_response(await _guard(programs.complete_exercise(uid, params)))


@router.post("/reflection")
async def reflection(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    week = body.get("week") or body.get("weekNumber")
    answers = body.get("answers")
    if not week or not isinstance(answers, dict):
        raise HTTPException(status_code=400, detail="week and answers required")
    state = await _guard(programs.submit_reflection(uid, _int_field(week, "week"), answers, body))
    return _state_response(state)


@router.post("/advance")
async def advance(body: Dict[str, Any]) -> Any:
    return _state_response(await _guard(programs.advance(_require_uid(body))))


@router.post("/can-advance")
async def can_advance(body: Dict[str, Any]) -> Any:
    return await _guard(programs.check_advance(_require_uid(body)))


@router.post("/dashboard")
async def dashboard(body: Dict[str, Any]) -> Any:
    return await _guard(programs.get_dashboard(_require_uid(body)))


@router.post("/recommendations")
async def recommendations(body: Dict[str, Any]) -> Any:
    return await _guard(programs.get_recommendations(_require_uid(body)))


@router.post("/profile/trigger")
async def profile_trigger(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    trigger = body.get("trigger")
    if not trigger:
        raise HTTPException(status_code=400, detail="trigger required")
    return await _guard(programs.update_profile(uid, lambda profile: profile_ops.add_trigger(profile, str(trigger))))


@router.post("/profile/pattern")
async def profile_pattern(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    pattern = body.get("pattern")
    if not pattern:
        raise HTTPException(status_code=400, detail="pattern required")
    return await _guard(programs.update_profile(uid, lambda profile: profile_ops.add_behavior_pattern(profile, str(pattern))))


@router.post("/profile/breakthrough")
async def profile_breakthrough(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    description = body.get("description")
    week = body.get("week") or body.get("weekNumber")
    if not description or not week:
        raise HTTPException(status_code=400, detail="description and week required")
    week_number = _int_field(week, "week")
    return await _guard(
        programs.update_profile(uid, lambda profile: profile_ops.record_breakthrough(profile, str(description), week_number))
    )


@router.post("/profile/growth-area")
async def profile_growth_area(body: Dict[str, Any]) -> Any:
    uid = _require_uid(body)
    area = body.get("area")
    progress = body.get("progress")
    if not area or progress is None:
        raise HTTPException(status_code=400, detail="area and progress required")
    value = _int_field(progress, "progress")
    return await _guard(
        programs.update_profile(uid, lambda profile: profile_ops.update_growth_area(profile, str(area), value))
    )


@router.get("/export", response_class=PlainTextResponse)
async def export(uid: str) -> Any:
    return await _guard(programs.export_state(uid))


@router.post("/import")
async def import_(body: Dict[str, Any]) -> Any:
    payload = body.get("payload")
    if not isinstance(payload, str) or not payload:
        raise HTTPException(status_code=400, detail="payload required")
    return _state_response(await _guard(programs.import_state(payload)))
