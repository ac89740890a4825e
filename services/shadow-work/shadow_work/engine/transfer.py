from datetime import datetime
from typing import Optional, Tuple

from pydantic import ValidationError

from ..schemas.dashboard import ProgressExport
from ..schemas.profile import Profile
from ..schemas.program import Program
from ..utils.clock import now_utc
from .errors import ImportFailed

EXPORT_VERSION = "1.0"


def export_progress(program: Program, profile: Profile, now: Optional[datetime] = None) -> str:
    payload = ProgressExport(program=program, profile=profile, export_date=now or now_utc(), version=EXPORT_VERSION)
    return payload.model_dump_json(indent=2)


def import_progress(text: str) -> Tuple[Program, Profile]:
    try:
        payload = ProgressExport.model_validate_json(text)
    except ValidationError as error:
        raise ImportFailed(f"Progress export is malformed ({error.error_count()} error(s))") from error
    if payload.version != EXPORT_VERSION:
        raise ImportFailed(f"Unsupported export version {payload.version!r}")
    if payload.program.user_id != payload.profile.user_id:
        raise ImportFailed("Program and profile belong to different users")
    if payload.program.personality_type != payload.profile.personality_type:
        raise ImportFailed("Program and profile were created for different personality types")
    return payload.program, payload.profile
