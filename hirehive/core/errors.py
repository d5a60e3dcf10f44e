"""
Error taxonomy for the posting and application engine.

Services raise these; the API turns them into ``{"errorKind": ..., "detail": ...}``
responses with the status code carried by each class.
"""


class HiveError(Exception):
    """Base class for all engine errors."""

    kind = "Error"
    status_code = 400

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.kind)
        self.detail = detail or self.kind

    def to_dict(self) -> dict:
        return {"errorKind": self.kind, "detail": self.detail}


class QuotaExceeded(HiveError):
    kind = "QuotaExceeded"
    status_code = 403

    def __init__(self, limit: int, plan_name: str):
        super().__init__(
            f"Job posting limit ({limit}) reached for your current plan ({plan_name}). Please upgrade."
        )
        self.limit = limit
        self.plan_name = plan_name

    def to_dict(self) -> dict:
        return {**super().to_dict(), "limit": self.limit, "planName": self.plan_name}


class Forbidden(HiveError):
    kind = "Forbidden"
    status_code = 403

    def __init__(self):
        # Callers never learn why access was denied
        super().__init__("forbidden")


class NotFound(HiveError):
    kind = "NotFound"
    status_code = 404


class DuplicateApplication(HiveError):
    kind = "DuplicateApplication"
    status_code = 409

    def __init__(self, detail: str = "You have already applied for this job."):
        super().__init__(detail)


class InvalidTransition(HiveError):
    kind = "InvalidTransition"
    status_code = 409

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move application from '{current}' to '{target}'")
        self.current = current
        self.target = target


class CvMissing(HiveError):
    kind = "CvMissing"
    status_code = 422

    def __init__(self, detail: str = "Upload your CV before applying."):
        super().__init__(detail)


class MissingScreeningAnswers(HiveError):
    kind = "MissingScreeningAnswers"
    status_code = 422

    def __init__(self, expected: int, missing: list[int]):
        if missing:
            detail = f"Answers required for screening questions {[i + 1 for i in missing]}"
        else:
            detail = f"Expected exactly {expected} screening answers"
        super().__init__(detail)
        self.expected = expected
        self.missing = missing

    def to_dict(self) -> dict:
        return {**super().to_dict(), "expected": self.expected, "missing": self.missing}


class InconsistentState(HiveError):
    """Job rows and the posting counter diverged. Operators must be paged."""

    kind = "InconsistentState"
    status_code = 500
