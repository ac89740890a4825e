from typing import List, Optional


class ShadowWorkError(ValueError):
    code = "shadow_work_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidType(ShadowWorkError):
    code = "invalid_type"

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown personality type: {value!r}")
        self.value = value


class NotStarted(ShadowWorkError):
    code = "not_started"

    def __init__(self, week_number: int) -> None:
        super().__init__(f"Week {week_number} has not been started yet")
        self.week_number = week_number


class InsufficientCompletions(ShadowWorkError):
    code = "insufficient_completions"

    def __init__(self, completed: int, required: int) -> None:
        self.completed = completed
        self.required = required
        self.remaining = max(0, required - completed)
        super().__init__(f"Complete {self.remaining} more exercise(s) to unlock the next week")


class ReflectionRequired(ShadowWorkError):
    code = "reflection_required"

    def __init__(self, week_number: int) -> None:
        super().__init__(f"Submit the week {week_number} reflection to unlock the next week")
        self.week_number = week_number


class AtFinalWeek(ShadowWorkError):
    code = "at_final_week"

    def __init__(self) -> None:
        super().__init__("Already at the final week of the program")


class ImportFailed(ShadowWorkError):
    code = "import_failed"


class CatalogueError(ShadowWorkError):
    code = "catalogue_error"

    def __init__(self, source: str, errors: Optional[List[str]] = None) -> None:
        self.errors = errors or []
        summary = "; ".join(self.errors) if self.errors else "invalid document"
        super().__init__(f"Catalogue {source} failed validation: {summary}")
